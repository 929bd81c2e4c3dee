from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ParsedPdf(BaseModel):
    text: str
    page_count: int = Field(ge=0)
    pages_with_text: int = Field(default=0, ge=0)

    @field_validator("text")
    @classmethod
    def _validate_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must contain at least one non-whitespace character")
        return value
