from __future__ import annotations

import logging

from supabase import Client

from resume_coach.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class SupabaseBlobStore:
    def __init__(self, client: Client, bucket: str, *, file_size_limit: int):
        self._client = client
        self._bucket = bucket
        self._file_size_limit = file_size_limit

    def ensure_bucket(self) -> None:
        try:
            buckets = self._client.storage.list_buckets()
            if any(getattr(bucket, "name", None) == self._bucket for bucket in buckets):
                logger.info("storage_bucket_exists bucket=%s", self._bucket)
                return
            self._client.storage.create_bucket(
                self._bucket,
                options={"public": False, "file_size_limit": self._file_size_limit},
            )
            logger.info("storage_bucket_created bucket=%s", self._bucket)
        except Exception as exc:  # noqa: BLE001
            raise UpstreamError("Storage is unavailable.", detail=str(exc)) from exc

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        try:
            self._client.storage.from_(self._bucket).upload(
                path,
                content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as exc:  # noqa: BLE001
            raise UpstreamError("Failed to store the uploaded file.", detail=str(exc)) from exc

    def signed_url(self, path: str, ttl_seconds: int) -> str:
        try:
            data = self._client.storage.from_(self._bucket).create_signed_url(path, ttl_seconds)
        except Exception as exc:  # noqa: BLE001
            raise UpstreamError("Failed to create a download link.", detail=str(exc)) from exc

        url = None
        if isinstance(data, dict):
            url = data.get("signedUrl") or data.get("signedURL")
        if not url:
            raise UpstreamError("Failed to create a download link.", detail=f"unexpected response for {path}")
        return str(url)
