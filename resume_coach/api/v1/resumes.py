import base64
import binascii

from fastapi import APIRouter, Depends, Request

from resume_coach.core.container import ServiceContainer, get_container
from resume_coach.core.errors import PayloadTooLargeError, ValidationError
from resume_coach.core.rate_limit import rate_limit
from resume_coach.core.request_body import authenticated_body
from resume_coach.core.security import current_user_id
from resume_coach.schemas.api import (
    ExtractPdfRequest,
    ExtractPdfResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
    SuggestionsRequest,
    SuggestionsResponse,
)

router = APIRouter()


def _decode_pdf_base64(raw: str | None, max_bytes: int) -> bytes:
    value = "".join((raw or "").split())
    if value.startswith("data:") and "," in value:
        value = value.split(",", 1)[1]
    if not value:
        raise ValidationError("PDF data is required")
    if len(value) * 3 // 4 > max_bytes + 3:
        raise PayloadTooLargeError(f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("PDF data must be valid base64.") from exc


@router.post("/extract-pdf", response_model=ExtractPdfResponse)
@rate_limit()
def extract_pdf(
    request: Request,
    payload: ExtractPdfRequest = Depends(authenticated_body(ExtractPdfRequest)),
    user_id: str = Depends(current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    _ = request
    content = _decode_pdf_base64(payload.pdf_base64, container.text_extractor.max_upload_bytes)
    result = container.text_extractor.extract(user_id, content, payload.file_name)
    return ExtractPdfResponse(text=result.text, resume_id=result.resume_id)


@router.post("/get-suggestions", response_model=SuggestionsResponse)
@rate_limit()
def get_suggestions(
    request: Request,
    payload: SuggestionsRequest = Depends(authenticated_body(SuggestionsRequest)),
    user_id: str = Depends(current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    _ = request
    outcome = container.suggestion_engine.generate(user_id, payload.resume_text, payload.resume_id)
    return SuggestionsResponse(
        suggestions=outcome.suggestions,
        feedback_id=outcome.feedback_id,
        resume_id=outcome.resume_id,
        summary=outcome.summary,
    )


@router.post("/update-suggestion-status", response_model=StatusUpdateResponse)
@rate_limit()
def update_suggestion_status(
    request: Request,
    payload: StatusUpdateRequest = Depends(authenticated_body(StatusUpdateRequest)),
    user_id: str = Depends(current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    _ = request
    container.status_tracker.update_status(
        user_id,
        payload.feedback_id,
        payload.suggestion_index,
        payload.status,
    )
    return StatusUpdateResponse()
