import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_coach.api.v1.auth import router as auth_router
from resume_coach.api.v1.health import router as health_router
from resume_coach.api.v1.history import router as history_router
from resume_coach.api.v1.resumes import router as resumes_router
from resume_coach.core.cors import cors_allowed_origins
from resume_coach.core.errors import ResumeCoachError
from resume_coach.core.rate_limit import limiter
from resume_coach.core.config import settings
from resume_coach.core.lifespan import lifespan
from resume_coach.schemas.api import ErrorResponse

logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Coach API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message).model_dump(by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(ResumeCoachError)
async def resume_coach_error_handler(request: Request, exc: ResumeCoachError):
    if exc.status_code >= 500:
        logger.error("request_failed path=%s error=%s detail=%s", request.url.path, type(exc).__name__, exc.detail)
    else:
        logger.info("request_rejected path=%s error=%s detail=%s", request.url.path, type(exc).__name__, exc.detail)
    return _error_response(exc.status_code, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request body")
    logger.info("request_invalid path=%s errors=%s", request.url.path, len(errors))
    return _error_response(status.HTTP_400_BAD_REQUEST, f"{location}: {message}" if location else message)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("request_crashed path=%s", request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong. Please try again.")


app.include_router(health_router, tags=["Health"])
app.include_router(auth_router, tags=["Auth"])
app.include_router(resumes_router, tags=["Resumes"])
app.include_router(history_router, tags=["History"])
