from __future__ import annotations

import logging

from resume_coach.core.errors import ConcurrentUpdateError, NotFound, ValidationError
from resume_coach.schemas.records import SUGGESTION_STATUSES, FeedbackRecord
from resume_coach.store.repository import RecordRepository, validate_record_id

logger = logging.getLogger(__name__)


class StatusTracker:
    """Sets the status of one suggestion inside a stored feedback record.

    Writes go through the store's version check; a lost race reloads the
    record and reapplies the change, so updates to different indices of the
    same record never overwrite each other.
    """

    def __init__(self, repository: RecordRepository, *, max_attempts: int = 5):
        self._repository = repository
        self._max_attempts = max(1, max_attempts)

    def update_status(self, user_id: str, feedback_id: str | None, index: int | None, status: str | None) -> FeedbackRecord:
        feedback_id = validate_record_id(feedback_id, field_label="Feedback id")
        if index is None or isinstance(index, bool) or index < 0:
            raise ValidationError("Suggestion index must be a non-negative integer.")
        if status not in SUGGESTION_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(SUGGESTION_STATUSES)}.")

        for attempt in range(1, self._max_attempts + 1):
            found = self._repository.get_feedback_versioned(user_id, feedback_id)
            if found is None:
                raise NotFound("Feedback not found")
            record, version = found
            if index >= len(record.suggestions):
                raise ValidationError(
                    f"Suggestion index {index} is out of range for {len(record.suggestions)} suggestion(s)."
                )

            suggestions = list(record.suggestions)
            suggestions[index] = suggestions[index].model_copy(update={"status": status})
            updated = record.model_copy(update={"suggestions": suggestions})
            if self._repository.replace_feedback(updated, expected_version=version):
                logger.info(
                    "suggestion_status_updated user=%s feedback=%s index=%s status=%s attempt=%s",
                    user_id,
                    feedback_id,
                    index,
                    status,
                    attempt,
                )
                return updated
            logger.info("suggestion_status_conflict feedback=%s attempt=%s", feedback_id, attempt)

        raise ConcurrentUpdateError("The feedback was changed by another request. Please try again.")
