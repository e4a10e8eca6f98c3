"""
api/main.py -- FastAPI application factory for ProjectHub.

create_app(settings) builds the app around an explicit Settings object. The
lifespan turns those settings into the process-wide collaborators and pins
them on app.state:

  app.state.engine          SQLAlchemy Engine (one per process)
  app.state.user_store      UserStore   -- credentials
  app.state.project_store   ProjectStore -- owner-scoped projects
  app.state.hasher          PasswordHasher (bcrypt, configured rounds)
  app.state.tokens          TokenService (signing secret, 7-day lifetime)

Nothing here reads the environment; asgi.py calls get_settings() once.

Middleware stack (outermost to innermost; Starlette wraps the most recently
added middleware outermost):
  1. log_requests    -- one access-log line per request with latency
  2. CORSMiddleware  -- adds CORS headers for allowed browser origins
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from api.models import ErrorResponse, HealthResponse, MessageResponse
from api.routes.auth import router as auth_router
from api.routes.projects import router as projects_router
from auth.store import UserStore
from auth.tokens import PasswordHasher, TokenService
from core.config import Settings, get_settings
from core.db import describe_url, make_engine
from core.exceptions import AuthenticationError, StoreError, ValidationError
from projects.store import ProjectStore

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("projecthub.api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build shared collaborators on startup and dispose the engine on shutdown.

    Startup order: engine first, then the stores (which create their tables
    on it), then the hasher and token service, which only need settings.
    """
    settings: Settings = app.state.settings
    logger.info("ProjectHub API starting up (database=%s)", describe_url(settings.database_url))
    app.state.engine = make_engine(settings.database_url)
    app.state.user_store = UserStore(app.state.engine)
    app.state.project_store = ProjectStore(app.state.engine)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(settings.secret_key, expire_seconds=settings.token_expire_seconds)
    logger.info("Auth initialized (token lifetime %ds)", settings.token_expire_seconds)

    yield

    app.state.engine.dispose()
    logger.info("ProjectHub API shutdown complete")


# ---------------------------------------------------------------------------
# Exception handlers
#
# 4xx bodies are {"message": ...}; 5xx bodies are {"error": ...}.
# ---------------------------------------------------------------------------


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=MessageResponse(message=exc.message).model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render missing or mistyped request fields as a 400 presence failure."""
    if any(err.get("type") == "json_invalid" for err in exc.errors()):
        return JSONResponse(status_code=400, content=MessageResponse(message="Malformed JSON body").model_dump())
    missing = [".".join(str(p) for p in err.get("loc", ())[1:]) or "body" for err in exc.errors()]
    message = f"Invalid or missing fields: {', '.join(missing)}" if missing else "Invalid request"
    return JSONResponse(status_code=400, content=MessageResponse(message=message).model_dump())


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=MessageResponse(message=exc.message).model_dump())


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Surface the raw store message to the client; the traceback goes to the log."""
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=500, content=ErrorResponse(error=exc.message).model_dump())


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected errors. The traceback goes to the log only."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error").model_dump())


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    # An exception escaping call_next is rendered as 500 by the catch-all handler.
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms %s",
            request.method,
            request.url.path,
            status_code,
            ms,
            request.client.host if request.client else "unknown",
        )
    return response


# ---------------------------------------------------------------------------
# Public endpoints defined on the app itself
# ---------------------------------------------------------------------------


async def home() -> PlainTextResponse:
    """Plain-text banner confirming the service is up."""
    return PlainTextResponse("Backend Running Successfully")


def health(request: Request) -> HealthResponse:
    """Return liveness plus a database round-trip check."""
    try:
        request.app.state.user_store.ping()
        database = "ok"
    except StoreError:
        logger.warning("Health check: database unreachable")
        database = "error"
    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=__version__,
        components={"app": "ok", "database": database},
    )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a ProjectHub FastAPI app bound to settings (default: environment)."""
    settings = settings or get_settings()
    logging.getLogger("projecthub").setLevel(settings.log_level)

    app = FastAPI(
        title="ProjectHub API",
        description="Register, log in, and manage your own projects.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Tokens travel in the Authorization header, never in cookies; allow_credentials stays off.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=3600,
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_api_route("/", home, methods=["GET"], include_in_schema=False)
    app.add_api_route("/api/health", health, methods=["GET"], response_model=HealthResponse, tags=["Health"])
    app.include_router(auth_router, prefix="/api", tags=["Auth"])
    app.include_router(projects_router, prefix="/api", tags=["Projects"])
    return app
