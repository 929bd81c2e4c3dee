from __future__ import annotations

import json
from typing import Any, Callable, Sequence

from resume_coach.ai.types import ChatMessage
from resume_coach.core.errors import UNAUTHORIZED_MESSAGE, AuthError, SignupRejected, UpstreamError
from resume_coach.integrations.types import AuthUser


class FakeAuthProvider:
    def __init__(self, tokens: dict[str, str] | None = None):
        self.tokens = dict(tokens or {})
        self.signups: list[AuthUser] = []

    def validate(self, token: str) -> str:
        user_id = self.tokens.get(token)
        if not user_id:
            raise AuthError(UNAUTHORIZED_MESSAGE)
        return user_id

    def sign_up(self, email: str, password: str, name: str) -> AuthUser:
        if any(user.email == email for user in self.signups):
            raise SignupRejected("A user with this email address has already been registered")
        user = AuthUser(
            id=f"user-{len(self.signups) + 1}",
            email=email,
            name=name,
            raw={"id": f"user-{len(self.signups) + 1}", "email": email, "user_metadata": {"name": name}},
        )
        self.signups.append(user)
        return user


class FakeBlobStore:
    def __init__(self, *, fail_upload: bool = False, fail_signing: bool = False):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_upload = fail_upload
        self.fail_signing = fail_signing
        self.signed: list[tuple[str, int]] = []

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        if self.fail_upload:
            raise UpstreamError("Failed to store the uploaded file.", detail="bucket missing")
        self.objects[path] = (content, content_type)

    def signed_url(self, path: str, ttl_seconds: int) -> str:
        if self.fail_signing:
            raise UpstreamError("Failed to create a download link.", detail="signing disabled")
        self.signed.append((path, ttl_seconds))
        return f"https://blobs.test/{path}?expires={ttl_seconds}"

    def ensure_bucket(self) -> None:
        return None


class FakeCompletionClient:
    """Returns canned completions and records the messages it was sent."""

    def __init__(self, responses: Sequence[str | Exception] | Callable[[Sequence[ChatMessage]], str]):
        self._responses = responses if callable(responses) else list(responses)
        self.calls: list[list[ChatMessage]] = []

    def complete(self, messages: Sequence[ChatMessage], *, json_mode: bool = True) -> str:
        self.calls.append(list(messages))
        if callable(self._responses):
            return self._responses(messages)
        if not self._responses:
            raise AssertionError("FakeCompletionClient ran out of responses")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def completion_json(suggestions: list[dict[str, Any]], *, key: str = "suggestions", summary: Any = None) -> str:
    payload: dict[str, Any] = {key: suggestions}
    if summary is not None:
        payload["summary"] = summary
    return json.dumps(payload)


SAMPLE_SUGGESTIONS = [
    {
        "category": "Impact",
        "title": "Quantify achievements",
        "description": "Add numbers to the payments migration bullet.",
        "priority": "high",
    },
    {
        "category": "Formatting",
        "title": "Use consistent dates",
        "description": "Pick one date format across roles.",
        "priority": "low",
        "status": "pending",
    },
    {
        "category": "Skills",
        "title": "Group technical skills",
        "description": "Split languages, frameworks and cloud tools.",
        "priority": "medium",
    },
]

SAMPLE_SUMMARY = {
    "professionalTitle": "Backend Engineer",
    "overallAssessment": "Solid experience with room to show measurable impact.",
}


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _content_stream(text: str) -> bytes:
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return b""
    parts = ["BT", "/F1 12 Tf", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            parts.append("0 -16 Td")
        parts.append(f"({_pdf_escape(line)}) Tj")
    parts.append("ET")
    return "\n".join(parts).encode("latin-1")


def build_pdf(pages: Sequence[str]) -> bytes:
    """Build a small valid PDF with one Helvetica text block per page.

    Empty strings produce pages without any text, like a scanned page.
    """
    page_ids = [4 + 2 * index for index in range(len(pages))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode("latin-1"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, pages):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode("latin-1")
        )
        stream = _content_stream(text)
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode("latin-1") + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("latin-1")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return bytes(out)
