from __future__ import annotations

import logging
import re
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from resume_coach.core.errors import ValidationError
from resume_coach.schemas.records import FeedbackRecord, ResumeRecord, UserProfile
from resume_coach.store.kv_store import KVStore

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_record_id(value: str | None, *, field_label: str) -> str:
    candidate = (value or "").strip()
    if not candidate:
        raise ValidationError(f"{field_label} is required.")
    if not _ID_RE.match(candidate):
        raise ValidationError(f"{field_label} must contain only letters, digits, '-' or '_'.")
    return candidate


def resume_prefix(user_id: str) -> str:
    return f"resume:{user_id}:"


def feedback_prefix(user_id: str) -> str:
    return f"feedback:{user_id}:"


def resume_key(user_id: str, resume_id: str) -> str:
    return f"{resume_prefix(user_id)}{resume_id}"


def feedback_key(user_id: str, feedback_id: str) -> str:
    return f"{feedback_prefix(user_id)}{feedback_id}"


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


class RecordRepository:
    """Typed access to resume, feedback and user records in a ``KVStore``."""

    def __init__(self, store: KVStore):
        self._store = store

    def get_resume(self, user_id: str, resume_id: str) -> ResumeRecord | None:
        value = self._store.get(resume_key(user_id, resume_id))
        if value is None:
            return None
        return ResumeRecord.model_validate(value)

    def create_resume_once(self, record: ResumeRecord) -> bool:
        """Store ``record`` unless its id is already taken. Returns True if written."""
        return self._store.put_if_absent(resume_key(record.user_id, record.id), record.to_store())

    def list_resumes(self, user_id: str) -> list[ResumeRecord]:
        return self._scan(resume_prefix(user_id), ResumeRecord)

    def save_feedback(self, record: FeedbackRecord) -> None:
        self._store.put(feedback_key(record.user_id, record.id), record.to_store())

    def get_feedback_versioned(self, user_id: str, feedback_id: str) -> tuple[FeedbackRecord, int] | None:
        found = self._store.get_versioned(feedback_key(user_id, feedback_id))
        if found is None:
            return None
        value, version = found
        return FeedbackRecord.model_validate(value), version

    def replace_feedback(self, record: FeedbackRecord, *, expected_version: int) -> bool:
        return self._store.put_if_version(
            feedback_key(record.user_id, record.id),
            record.to_store(),
            expected_version,
        )

    def list_feedback(self, user_id: str) -> list[FeedbackRecord]:
        return self._scan(feedback_prefix(user_id), FeedbackRecord)

    def save_user_profile(self, profile: UserProfile) -> None:
        self._store.put(user_key(profile.id), profile.to_store())

    def _scan(self, prefix: str, model: type[ModelT]) -> list[ModelT]:
        records: list[ModelT] = []
        for key, value in self._store.scan_by_prefix(prefix):
            try:
                records.append(model.model_validate(value))
            except ModelValidationError as exc:
                logger.warning("kv_record_invalid key=%s model=%s: %s", key, model.__name__, exc)
        return records
