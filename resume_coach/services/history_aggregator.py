from __future__ import annotations

import logging

from resume_coach.core.errors import UpstreamError
from resume_coach.integrations.types import BlobStore
from resume_coach.schemas.records import FeedbackRecord, HistoryEntry, ResumeRecord
from resume_coach.store.repository import RecordRepository

logger = logging.getLogger(__name__)


def _latest_feedback_by_resume(feedbacks: list[FeedbackRecord]) -> tuple[dict[str, FeedbackRecord], dict[str, int]]:
    latest: dict[str, FeedbackRecord] = {}
    counts: dict[str, int] = {}
    for feedback in feedbacks:
        counts[feedback.resume_id] = counts.get(feedback.resume_id, 0) + 1
        current = latest.get(feedback.resume_id)
        if current is None or (feedback.created_at, feedback.id) > (current.created_at, current.id):
            latest[feedback.resume_id] = feedback
    return latest, counts


class HistoryAggregator:
    """Joins a user's resumes with their feedback, newest upload first.

    When several feedback records point at the same resume the most recently
    created one is attached and ``feedback_count`` reports how many exist.
    """

    def __init__(self, repository: RecordRepository, blob_store: BlobStore, *, signed_url_ttl_seconds: int = 3600):
        self._repository = repository
        self._blob_store = blob_store
        self._signed_url_ttl_seconds = signed_url_ttl_seconds

    def _download_url(self, resume: ResumeRecord) -> str | None:
        if not resume.storage_path:
            return None
        try:
            return self._blob_store.signed_url(resume.storage_path, self._signed_url_ttl_seconds)
        except UpstreamError as exc:
            logger.warning("signed_url_failed resume=%s: %s", resume.id, exc.detail or exc)
            return None

    def history(self, user_id: str) -> list[HistoryEntry]:
        resumes = self._repository.list_resumes(user_id)
        feedbacks = self._repository.list_feedback(user_id)
        latest, counts = _latest_feedback_by_resume(feedbacks)

        entries = [
            HistoryEntry(
                **resume.model_dump(),
                download_url=self._download_url(resume),
                feedback=latest.get(resume.id),
                feedback_count=counts.get(resume.id, 0),
            )
            for resume in resumes
        ]
        # Two stable sorts: id breaks ties among equal timestamps.
        entries.sort(key=lambda entry: entry.id)
        entries.sort(key=lambda entry: entry.uploaded_at, reverse=True)
        logger.info("history_built user=%s resumes=%s feedback=%s", user_id, len(resumes), len(feedbacks))
        return entries
