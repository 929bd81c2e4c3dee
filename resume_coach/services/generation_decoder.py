from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from resume_coach.core.errors import NoSuggestions, UpstreamError
from resume_coach.schemas.records import PRIORITIES, SUGGESTION_STATUSES, Suggestion, Summary

logger = logging.getLogger(__name__)

# Checked in order; the first key present in the payload is used.
SUGGESTION_LIST_ALIASES: tuple[str, ...] = ("suggestions", "improvements", "items", "recommendations")

MALFORMED_MESSAGE = "The suggestion service returned an unexpected response. Please try again."
NO_SUGGESTIONS_MESSAGE = "No suggestions generated. Please ensure your resume has sufficient content."

DEFAULT_CATEGORY = "General"
DEFAULT_PRIORITY = "medium"
DEFAULT_STATUS = "pending"


@dataclass(frozen=True)
class DecodedGeneration:
    suggestions: list[Suggestion]
    summary: Summary
    alias: str
    dropped: int = 0


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _choice(value: Any, allowed: tuple[str, ...], default: str) -> str:
    candidate = _text(value).lower()
    return candidate if candidate in allowed else default


def _decode_suggestion(item: Any) -> Suggestion | None:
    if not isinstance(item, dict):
        return None
    title = _text(item.get("title"))
    description = _text(item.get("description"))
    if not title and not description:
        return None
    return Suggestion(
        category=_text(item.get("category")) or DEFAULT_CATEGORY,
        title=title or description,
        description=description or title,
        priority=_choice(item.get("priority"), PRIORITIES, DEFAULT_PRIORITY),
        status=_choice(item.get("status"), SUGGESTION_STATUSES, DEFAULT_STATUS),
    )


def _decode_summary(value: Any) -> Summary:
    if not isinstance(value, dict):
        return Summary()
    defaults = Summary()
    return Summary(
        professional_title=_text(value.get("professionalTitle")) or defaults.professional_title,
        overall_assessment=_text(value.get("overallAssessment")) or defaults.overall_assessment,
    )


def _select_list(payload: dict[str, Any]) -> tuple[str, list[Any]]:
    for alias in SUGGESTION_LIST_ALIASES:
        value = payload.get(alias)
        if value is None:
            continue
        if not isinstance(value, list):
            raise UpstreamError(MALFORMED_MESSAGE, detail=f"'{alias}' is {type(value).__name__}, not a list")
        return alias, value
    raise UpstreamError(
        MALFORMED_MESSAGE,
        detail=f"none of {SUGGESTION_LIST_ALIASES} in keys {sorted(payload)[:10]}",
    )


def decode_generation(raw: str) -> DecodedGeneration:
    """Turn a JSON completion into normalized suggestions and a summary.

    Suggestions keep their original order. Missing or unknown statuses
    become ``pending``; entries without a title or description are dropped.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise UpstreamError(MALFORMED_MESSAGE, detail=f"invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise UpstreamError(MALFORMED_MESSAGE, detail=f"top level is {type(payload).__name__}")

    alias, items = _select_list(payload)
    suggestions: list[Suggestion] = []
    for item in items:
        decoded = _decode_suggestion(item)
        if decoded is not None:
            suggestions.append(decoded)

    dropped = len(items) - len(suggestions)
    if dropped:
        logger.warning("generation_items_dropped alias=%s dropped=%s kept=%s", alias, dropped, len(suggestions))
    if not suggestions:
        raise NoSuggestions(NO_SUGGESTIONS_MESSAGE)

    return DecodedGeneration(
        suggestions=suggestions,
        summary=_decode_summary(payload.get("summary")),
        alias=alias,
        dropped=dropped,
    )
