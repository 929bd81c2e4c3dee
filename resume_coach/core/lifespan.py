from contextlib import asynccontextmanager
import logging

from resume_coach.core.container import build_default_container
from resume_coach.core.errors import UpstreamError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    if getattr(app.state, "container", None) is None:
        app.state.container = build_default_container()

    try:
        app.state.container.blob_store.ensure_bucket()
    except UpstreamError as exc:
        # Uploads fall back to text-only records until storage comes back.
        logger.warning("storage_init_failed: %s", exc.detail or exc)

    yield

    close = getattr(app.state.container.store, "close", None)
    if callable(close):
        close()
