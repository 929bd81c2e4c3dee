from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    kv_db_path: str
    supabase_url: str | None
    supabase_service_role_key: str | None
    storage_bucket: str
    storage_file_size_limit: int
    signed_url_ttl_seconds: int
    max_upload_bytes: int
    max_resume_chars: int
    upload_temp_dir: str | None
    status_update_max_attempts: int


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    kv_db_path=_get_env("KV_DB_PATH", "data/resume_coach.db") or "data/resume_coach.db",
    supabase_url=_get_env("SUPABASE_URL"),
    supabase_service_role_key=_get_env("SUPABASE_SERVICE_ROLE_KEY"),
    storage_bucket=_get_env("STORAGE_BUCKET", "resumes") or "resumes",
    storage_file_size_limit=_get_env_int("STORAGE_FILE_SIZE_LIMIT", 10 * 1024 * 1024),
    signed_url_ttl_seconds=_get_env_int("SIGNED_URL_TTL_SECONDS", 3600),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    max_resume_chars=_get_env_int("MAX_RESUME_CHARS", 120000),
    upload_temp_dir=_get_env("UPLOAD_TEMP_DIR"),
    status_update_max_attempts=_get_env_int("STATUS_UPDATE_MAX_ATTEMPTS", 5),
)

if settings.status_update_max_attempts < 1:
    raise RuntimeError("STATUS_UPDATE_MAX_ATTEMPTS must be at least 1.")
