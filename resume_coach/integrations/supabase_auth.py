from __future__ import annotations

import logging
from typing import Any

from supabase import Client

from resume_coach.core.errors import UNAUTHORIZED_MESSAGE, AuthError, SignupRejected, UpstreamError
from resume_coach.integrations.types import AuthUser

logger = logging.getLogger(__name__)


def _dump_user(user: Any) -> dict[str, Any]:
    if hasattr(user, "model_dump"):
        return user.model_dump(mode="json")
    if isinstance(user, dict):
        return dict(user)
    return {"id": getattr(user, "id", None), "email": getattr(user, "email", None)}


def _is_client_error(exc: Exception) -> bool:
    status_code = getattr(exc, "status", None)
    return isinstance(status_code, int) and 400 <= status_code < 500


class SupabaseAuthProvider:
    def __init__(self, client: Client):
        self._client = client

    def validate(self, token: str) -> str:
        if not token:
            raise AuthError(UNAUTHORIZED_MESSAGE)
        try:
            response = self._client.auth.get_user(token)
        except Exception as exc:  # noqa: BLE001 - every provider failure denies access
            logger.info("auth_validate_failed: %s", exc)
            raise AuthError(UNAUTHORIZED_MESSAGE, detail=str(exc)) from exc

        user = getattr(response, "user", None) if response is not None else None
        user_id = getattr(user, "id", None)
        if not user_id:
            raise AuthError(UNAUTHORIZED_MESSAGE)
        return str(user_id)

    def sign_up(self, email: str, password: str, name: str) -> AuthUser:
        try:
            response = self._client.auth.admin.create_user(
                {
                    "email": email,
                    "password": password,
                    "user_metadata": {"name": name},
                    # No mail server is configured, so accounts are confirmed up front.
                    "email_confirm": True,
                }
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("auth_signup_failed email_domain=%s: %s", email.rsplit("@", 1)[-1], exc)
            if _is_client_error(exc):
                raise SignupRejected(str(exc) or "Signup was rejected.") from exc
            raise UpstreamError("Failed to register user.", detail=str(exc)) from exc

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise UpstreamError("Failed to register user.", detail="provider returned no user")
        return AuthUser(id=str(user.id), email=email, name=name, raw=_dump_user(user))
