from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from resume_coach.ai.types import CompletionClient
from resume_coach.core.config import Settings, settings as default_settings
from resume_coach.integrations.types import AuthProvider, BlobStore
from resume_coach.services.accounts import AccountService
from resume_coach.services.history_aggregator import HistoryAggregator
from resume_coach.services.status_tracker import StatusTracker
from resume_coach.services.suggestion_engine import SuggestionEngine
from resume_coach.services.text_extractor import TextExtractor
from resume_coach.store.kv_store import KVStore, SqliteKVStore
from resume_coach.store.repository import RecordRepository


@dataclass(frozen=True)
class ServiceContainer:
    store: KVStore
    auth: AuthProvider
    blob_store: BlobStore
    accounts: AccountService
    text_extractor: TextExtractor
    suggestion_engine: SuggestionEngine
    status_tracker: StatusTracker
    history: HistoryAggregator


def build_container(
    *,
    store: KVStore,
    auth: AuthProvider,
    blob_store: BlobStore,
    ai_client: CompletionClient,
    config: Settings = default_settings,
) -> ServiceContainer:
    repository = RecordRepository(store)
    return ServiceContainer(
        store=store,
        auth=auth,
        blob_store=blob_store,
        accounts=AccountService(repository, auth),
        text_extractor=TextExtractor(
            repository,
            blob_store,
            max_upload_bytes=config.max_upload_bytes,
            temp_dir=config.upload_temp_dir,
        ),
        suggestion_engine=SuggestionEngine(repository, ai_client, max_resume_chars=config.max_resume_chars),
        status_tracker=StatusTracker(repository, max_attempts=config.status_update_max_attempts),
        history=HistoryAggregator(
            repository,
            blob_store,
            signed_url_ttl_seconds=config.signed_url_ttl_seconds,
        ),
    )


def build_default_container(config: Settings = default_settings) -> ServiceContainer:
    from resume_coach.ai.factory import get_ai_client
    from resume_coach.integrations.supabase_auth import SupabaseAuthProvider
    from resume_coach.integrations.supabase_client import get_supabase_client
    from resume_coach.integrations.supabase_storage import SupabaseBlobStore

    client = get_supabase_client()
    return build_container(
        store=SqliteKVStore(config.kv_db_path),
        auth=SupabaseAuthProvider(client),
        blob_store=SupabaseBlobStore(client, config.storage_bucket, file_size_limit=config.storage_file_size_limit),
        ai_client=get_ai_client(),
        config=config,
    )


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Service container is not initialised.")
    return container
