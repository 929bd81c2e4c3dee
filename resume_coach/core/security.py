from __future__ import annotations

from fastapi import Depends, Header

from resume_coach.core.container import ServiceContainer, get_container
from resume_coach.core.errors import UNAUTHORIZED_MESSAGE, AuthError


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        return ""
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def current_user_id(
    authorization: str | None = Header(default=None),
    container: ServiceContainer = Depends(get_container),
) -> str:
    token = _bearer_token(authorization)
    if not token:
        raise AuthError(UNAUTHORIZED_MESSAGE)
    return container.auth.validate(token)
