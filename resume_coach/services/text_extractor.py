from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePosixPath, PureWindowsPath

from resume_coach.core.errors import PayloadTooLargeError, UpstreamError, ValidationError
from resume_coach.integrations.types import BlobStore
from resume_coach.parsing.pdf_text import extract_pdf_text
from resume_coach.schemas.records import ResumeRecord
from resume_coach.store.repository import RecordRepository

logger = logging.getLogger(__name__)

DEFAULT_PDF_FILE_NAME = "resume.pdf"
PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    resume_id: str
    resume: ResumeRecord
    page_count: int


def _clean_file_name(file_name: str | None) -> str:
    raw = (file_name or "").strip()
    # Browsers on Windows may send the full client path.
    name = PureWindowsPath(PurePosixPath(raw).name).name.strip()
    return name[:255] or DEFAULT_PDF_FILE_NAME


class TextExtractor:
    def __init__(
        self,
        repository: RecordRepository,
        blob_store: BlobStore,
        *,
        max_upload_bytes: int,
        temp_dir: str | None = None,
    ):
        self._repository = repository
        self._blob_store = blob_store
        self._max_upload_bytes = max_upload_bytes
        self._temp_dir = temp_dir

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_bytes

    def extract(self, user_id: str, content: bytes, file_name: str | None = None) -> ExtractionResult:
        if not content:
            raise ValidationError("PDF data is required")
        if len(content) > self._max_upload_bytes:
            raise PayloadTooLargeError(
                f"File too large. Maximum allowed size is {self._max_upload_bytes // (1024 * 1024)} MB."
            )

        logger.info("pdf_extraction_started user=%s bytes=%s", user_id, len(content))
        parsed = extract_pdf_text(content, temp_dir=self._temp_dir)

        resume_id = str(uuid.uuid4())
        name = _clean_file_name(file_name)
        storage_path: str | None = f"{user_id}/{resume_id}/{name}"
        try:
            self._blob_store.upload(storage_path, content, PDF_CONTENT_TYPE)
        except UpstreamError as exc:
            logger.warning("pdf_upload_failed user=%s resume=%s: %s", user_id, resume_id, exc.detail or exc)
            storage_path = None

        record = ResumeRecord(
            id=resume_id,
            user_id=user_id,
            file_name=name,
            storage_path=storage_path,
            uploaded_at=datetime.now(timezone.utc),
        )
        self._repository.create_resume_once(record)
        logger.info(
            "resume_extracted user=%s resume=%s pages=%s text_len=%s stored=%s",
            user_id,
            resume_id,
            parsed.page_count,
            len(parsed.text),
            storage_path is not None,
        )
        return ExtractionResult(
            text=parsed.text,
            resume_id=resume_id,
            resume=record,
            page_count=parsed.page_count,
        )
