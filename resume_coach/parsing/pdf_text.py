from __future__ import annotations

import logging
import tempfile

from pypdf import PasswordType, PdfReader

from resume_coach.core.errors import ExtractionEmpty, ExtractionFailure

from .models import ParsedPdf

logger = logging.getLogger(__name__)

EMPTY_PDF_MESSAGE = (
    "Could not extract text from PDF. The PDF might be an image-based PDF, scanned document, "
    "or encrypted. Please try using the \"Paste Text\" option instead."
)
UNREADABLE_PDF_MESSAGE = (
    "Could not extract text from PDF. Please copy your resume text and paste it directly instead."
)


def _unlock(reader: PdfReader) -> bool:
    if not reader.is_encrypted:
        return True
    try:
        return reader.decrypt("") != PasswordType.NOT_DECRYPTED
    except Exception as exc:  # noqa: BLE001 - any decryption error means the text is out of reach
        logger.info("pdf_decrypt_failed: %s", exc)
        return False


def _read_pages(reader: PdfReader) -> tuple[list[str], int]:
    page_chunks: list[str] = []
    page_count = len(reader.pages)
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            page_chunks.append(page_text.strip())
    return page_chunks, page_count


def extract_pdf_text(content: bytes, *, temp_dir: str | None = None) -> ParsedPdf:
    """Decode every page of ``content`` into plain text.

    The bytes are spooled to a temporary file that is removed before this
    function returns or raises. Raises ``ExtractionEmpty`` when the document
    has no extractable text and ``ExtractionFailure`` when pypdf cannot read it.
    """
    with tempfile.NamedTemporaryFile(suffix=".pdf", dir=temp_dir) as tmp_file:
        tmp_file.write(content)
        tmp_file.flush()

        try:
            reader = PdfReader(tmp_file.name)
            if not _unlock(reader):
                raise ExtractionEmpty(EMPTY_PDF_MESSAGE, detail="encrypted")
            page_chunks, page_count = _read_pages(reader)
        except ExtractionEmpty:
            raise
        except Exception as exc:
            raise ExtractionFailure(UNREADABLE_PDF_MESSAGE, detail=f"{type(exc).__name__}: {exc}") from exc

    if not page_chunks:
        raise ExtractionEmpty(EMPTY_PDF_MESSAGE, detail=f"no text on {page_count} page(s)")

    return ParsedPdf(
        text="\n\n".join(page_chunks),
        page_count=page_count,
        pages_with_text=len(page_chunks),
    )
