from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import List, Optional
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ninja_api.core.errors import NinjaApiError, ValidationError
from ninja_api.core.logging import configure_logging, correlation_id_var
from ninja_api.core.settings import get_app_settings
from ninja_api.db.run_migrations import main as run_alembic
from ninja_api.db.seed import seed_all
from ninja_api.schemas.common import FieldErrorItem, MessageResponse, ProblemDetail

from ninja_api.api.routes.ninjas import router as ninjas_router

settings = get_app_settings()

# Configure structured logging once at import
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"
VALIDATION_TITLE = "Validation failed"

openapi_tags = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Ninjas", "description": "Ninja registry: create, search, update and delete."},
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
    terms_of_service="https://soujava-brasilia.github.io/",
    contact={
        "name": "SouJava Brasilia",
        "url": "https://soujava-brasilia.github.io/",
        "email": "contato@soujava-brasilia.org",
    },
    license_info={"name": "MIT License", "url": "https://opensource.org/licenses/MIT"},
)

# CORS - avoid wildcard with credentials
cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
    logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
    cors_allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Bind a correlation_id to the request for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_problem_response(
    request: Request,
    status_code: int,
    title: str,
    detail: Optional[str],
    errors: Optional[List[FieldErrorItem]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build a problem-detail JSONResponse; null members are omitted."""
    problem = ProblemDetail(
        status=status_code,
        title=title,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        timestamp=datetime.now(tz=timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_JSON,
        headers=headers,
    )


def _request_field_errors(exc: RequestValidationError) -> List[FieldErrorItem]:
    """Flatten pydantic errors to one {field, message} entry per violated constraint."""
    items: List[FieldErrorItem] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # loc starts with the request part (body/query/path); a bare part or a
        # JSON decode position names no field
        if err.get("type") == "json_invalid" or len(loc) <= 1:
            field = loc[0] if loc else "body"
        else:
            field = ".".join(loc[1:])
        items.append(FieldErrorItem(field=field, message=err.get("msg", "Invalid value")))
    return items


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Translate request binding/validation failures to a 400 problem detail.
    """
    errors = _request_field_errors(exc)
    logger.warning("Validation failed: %s", [e.model_dump() for e in errors])
    return _build_problem_response(
        request=request,
        status_code=400,
        title=VALIDATION_TITLE,
        detail="One or more fields are invalid",
        errors=errors,
    )


@app.exception_handler(NinjaApiError)
async def ninja_api_exception_handler(request: Request, exc: NinjaApiError):
    """
    Translate business errors raised by the service and dependencies.
    """
    if isinstance(exc, ValidationError):
        errors = [FieldErrorItem(field=e.field, message=e.message) for e in exc.errors]
        logger.warning("Validation failed: %s", [e.model_dump() for e in errors])
        return _build_problem_response(
            request=request,
            status_code=exc.http_status,
            title=VALIDATION_TITLE,
            detail=exc.message,
            errors=errors,
        )

    logger.info("%s: %s", type(exc).__name__, exc.message)
    return _build_problem_response(
        request=request,
        status_code=exc.http_status,
        title=HTTPStatus(exc.http_status).phrase,
        detail=exc.message,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Framework HTTP errors (unknown route, method not allowed) in the same envelope.
    """
    return _build_problem_response(
        request=request,
        status_code=exc.status_code,
        title=HTTPStatus(exc.status_code).phrase,
        detail=exc.detail if isinstance(exc.detail, str) else None,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.

    Runs outside request_context_middleware, so the correlation id is taken
    from request.state and bound again for the log line.
    """
    corr = getattr(request.state, "correlation_id", None)
    token_corr = correlation_id_var.set(corr)
    try:
        logger.exception("Unhandled error processing request (correlation_id=%s)", corr)
    finally:
        correlation_id_var.reset(token_corr)
    return _build_problem_response(
        request=request,
        status_code=500,
        title=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
        detail="An unexpected error occurred",
        headers={"X-Correlation-ID": corr} if corr else None,
    )


@app.on_event("startup")
async def on_startup() -> None:
    """
    Run migrations and optional seeding on service startup.

    Seeding is opt-in via settings.
    """
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        try:
            logger.info("Running Alembic migrations: upgrade head")
            # env.py drives its own event loop, so it cannot share the server's
            await asyncio.to_thread(run_alembic, ["upgrade", "head"])
            logger.info("Migrations completed.")
        except Exception as exc:
            logger.exception("Migration step failed: %s", exc)
            # Keep serving; readiness is decided by the database itself.

    if settings.AUTO_SEED:
        try:
            logger.info("Running database seeding...")
            await seed_all()
            logger.info("Seeding completed.")
        except Exception as exc:
            logger.exception("Seeding step failed: %s", exc)


api_v1 = APIRouter(prefix="/v1")


# PUBLIC_INTERFACE
@api_v1.get(
    "/health",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy")


api_v1.include_router(ninjas_router)

app.include_router(api_v1)
