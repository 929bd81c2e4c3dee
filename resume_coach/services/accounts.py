from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from resume_coach.core.errors import ValidationError
from resume_coach.integrations.types import AuthProvider
from resume_coach.schemas.records import UserProfile
from resume_coach.store.repository import RecordRepository

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, repository: RecordRepository, auth: AuthProvider):
        self._repository = repository
        self._auth = auth

    def sign_up(self, email: str | None, password: str | None, name: str | None) -> dict[str, Any]:
        email = (email or "").strip()
        name = (name or "").strip()
        if not email or not password or not name:
            raise ValidationError("Email, password, and name are required")

        user = self._auth.sign_up(email, password, name)
        profile = UserProfile(
            id=user.id,
            email=email,
            name=name,
            created_at=datetime.now(timezone.utc),
        )
        self._repository.save_user_profile(profile)
        logger.info("user_registered user=%s", user.id)
        return user.raw or profile.to_store()
