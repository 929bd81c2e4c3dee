from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Priority = Literal["high", "medium", "low"]
SuggestionStatus = Literal["pending", "implemented", "ignored"]

PRIORITIES: tuple[Priority, ...] = ("high", "medium", "low")
SUGGESTION_STATUSES: tuple[SuggestionStatus, ...] = ("pending", "implemented", "ignored")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_store(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Suggestion(CamelModel):
    category: str
    title: str
    description: str
    priority: Priority = "medium"
    status: SuggestionStatus = "pending"


class Summary(CamelModel):
    professional_title: str = "Professional"
    overall_assessment: str = "Resume analysis completed."


class ResumeRecord(CamelModel):
    id: str
    user_id: str
    file_name: str
    storage_path: str | None = None
    uploaded_at: datetime


class FeedbackRecord(CamelModel):
    id: str
    user_id: str
    resume_id: str
    suggestions: list[Suggestion] = Field(min_length=1)
    summary: Summary | None = None
    created_at: datetime


class UserProfile(CamelModel):
    id: str
    email: str
    name: str
    created_at: datetime


class HistoryEntry(ResumeRecord):
    download_url: str | None = None
    feedback: FeedbackRecord | None = None
    feedback_count: int = 0
