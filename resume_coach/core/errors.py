from __future__ import annotations

from fastapi import status

UNAUTHORIZED_MESSAGE = "Unauthorized - please log in"


class ResumeCoachError(Exception):
    """Base class for errors that map onto an HTTP response.

    ``str(exc)`` is the message shown to the caller. Anything that must not
    reach the end user goes into ``detail`` and is only logged.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, detail: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class AuthError(ResumeCoachError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ValidationError(ResumeCoachError):
    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLargeError(ValidationError):
    status_code = 413


class SignupRejected(ResumeCoachError):
    status_code = status.HTTP_400_BAD_REQUEST


class ExtractionEmpty(ResumeCoachError):
    status_code = status.HTTP_400_BAD_REQUEST


class ExtractionFailure(ResumeCoachError):
    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(ResumeCoachError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NoSuggestions(ResumeCoachError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ResumeCoachError):
    status_code = status.HTTP_404_NOT_FOUND


class ConcurrentUpdateError(ResumeCoachError):
    status_code = status.HTTP_409_CONFLICT
