from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from resume_coach.ai.types import CompletionClient
from resume_coach.core.errors import ValidationError
from resume_coach.schemas.records import FeedbackRecord, ResumeRecord, Suggestion, Summary
from resume_coach.services.generation_decoder import decode_generation
from resume_coach.services.prompts import build_suggestion_messages
from resume_coach.store.repository import RecordRepository, validate_record_id

logger = logging.getLogger(__name__)

PASTED_RESUME_FILE_NAME = "pasted-resume.txt"


@dataclass(frozen=True)
class GenerationOutcome:
    feedback_id: str
    resume_id: str
    suggestions: list[Suggestion]
    summary: Summary


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SuggestionEngine:
    def __init__(self, repository: RecordRepository, ai_client: CompletionClient, *, max_resume_chars: int):
        self._repository = repository
        self._ai_client = ai_client
        self._max_resume_chars = max_resume_chars

    def ensure_resume_exists(self, user_id: str, resume_id: str) -> bool:
        """Create a pasted-text resume record unless one already exists.

        Returns True when this call created the record.
        """
        record = ResumeRecord(
            id=resume_id,
            user_id=user_id,
            file_name=PASTED_RESUME_FILE_NAME,
            storage_path=None,
            uploaded_at=_utc_now(),
        )
        created = self._repository.create_resume_once(record)
        if created:
            logger.info("pasted_resume_saved user=%s resume=%s", user_id, resume_id)
        return created

    def generate(self, user_id: str, resume_text: str | None, resume_id: str | None = None) -> GenerationOutcome:
        text = resume_text or ""
        if not text.strip():
            raise ValidationError("Resume text is required")
        if len(text) > self._max_resume_chars:
            raise ValidationError(f"Resume text is too long. Maximum is {self._max_resume_chars} characters.")
        if resume_id is None or not resume_id.strip():
            resume_id = str(uuid.uuid4())
        else:
            resume_id = validate_record_id(resume_id, field_label="Resume id")

        logger.info("suggestions_requested user=%s resume=%s text_len=%s", user_id, resume_id, len(text))
        self.ensure_resume_exists(user_id, resume_id)

        started = time.perf_counter()
        raw = self._ai_client.complete(build_suggestion_messages(text), json_mode=True)
        decoded = decode_generation(raw)

        feedback = FeedbackRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            resume_id=resume_id,
            suggestions=decoded.suggestions,
            summary=decoded.summary,
            created_at=_utc_now(),
        )
        self._repository.save_feedback(feedback)
        logger.info(
            "suggestions_stored user=%s resume=%s feedback=%s count=%s latency_ms=%s",
            user_id,
            resume_id,
            feedback.id,
            len(feedback.suggestions),
            int((time.perf_counter() - started) * 1000),
        )
        return GenerationOutcome(
            feedback_id=feedback.id,
            resume_id=resume_id,
            suggestions=feedback.suggestions,
            summary=decoded.summary,
        )
