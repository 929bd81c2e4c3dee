from __future__ import annotations

import logging
import os
import threading
from typing import Optional, Sequence

from openai import OpenAI, OpenAIError

from resume_coach.ai.types import ChatMessage
from resume_coach.core.errors import UpstreamError

logger = logging.getLogger(__name__)

UPSTREAM_MESSAGE = "The suggestion service is unavailable right now. Please try again."


class OpenAIProvider:
    """Chat-completions client.

    Timeouts, connection errors and 5xx responses are retried by the SDK
    ``max_retries`` times before the error surfaces as ``UpstreamError``.
    The SDK client is created on first use so a missing key only fails the
    requests that need it.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 1,
        temperature: float = 0.7,
    ):
        self._model = model
        self._temperature = temperature
        self._api_key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        self._base_url = base_url or os.getenv("OPENAI_BASE_URL") or None
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._client: OpenAI | None = None
        self._client_lock = threading.Lock()

    def _get_client(self) -> OpenAI:
        if not self._api_key:
            raise UpstreamError("OpenAI API key not configured", detail="OPENAI_API_KEY is missing")
        with self._client_lock:
            if self._client is None:
                self._client = OpenAI(
                    api_key=self._api_key,
                    base_url=self._base_url,
                    timeout=self._timeout_s,
                    max_retries=self._max_retries,
                )
            return self._client

    def complete(self, messages: Sequence[ChatMessage], *, json_mode: bool = True) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        create_kwargs = {
            "model": self._model,
            "messages": payload,
            "temperature": self._temperature,
        }
        if json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        client = self._get_client()
        try:
            response = client.chat.completions.create(**create_kwargs)
        except OpenAIError as exc:
            logger.warning("openai_completion_failed model=%s: %s", self._model, exc)
            raise UpstreamError(UPSTREAM_MESSAGE, detail=str(exc)) from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise UpstreamError(UPSTREAM_MESSAGE, detail="empty completion content")
        return content
