from __future__ import annotations

from typing import Any

from resume_coach.schemas.records import CamelModel, HistoryEntry, Suggestion, Summary

# Request fields are optional so that missing values reach the services and
# come back as 400s with a readable message instead of schema errors.


class SignupRequest(CamelModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class SignupResponse(CamelModel):
    success: bool = True
    user: dict[str, Any]


class ExtractPdfRequest(CamelModel):
    pdf_base64: str | None = None
    file_name: str | None = None


class ExtractPdfResponse(CamelModel):
    success: bool = True
    text: str
    resume_id: str


class SuggestionsRequest(CamelModel):
    resume_text: str | None = None
    resume_id: str | None = None


class SuggestionsResponse(CamelModel):
    success: bool = True
    suggestions: list[Suggestion]
    feedback_id: str
    resume_id: str
    summary: Summary


class HistoryResponse(CamelModel):
    success: bool = True
    history: list[HistoryEntry]


class StatusUpdateRequest(CamelModel):
    feedback_id: str | None = None
    suggestion_index: int | None = None
    status: str | None = None


class StatusUpdateResponse(CamelModel):
    success: bool = True


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
