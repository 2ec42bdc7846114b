import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth.session import AuthSession
from .config import Settings, get_settings
from .errors import (
    AppError,
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    PermissionError,
    StorageError,
    ValidationError,
    error_payload,
    resolve_error_code,
)
from .infra.storage import KeyValueStorage, create_storage
from .routers import auth, dashboard, records
from .stores.entities import build_stores

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger("dashboard")


def configure_logging(level_name: str | None = None) -> int:
    """Configure root logging once and set the ``dashboard`` logger level.

    Unknown level names fall back to INFO.
    """
    level = logging.getLevelName((level_name or os.getenv("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)
    return level


configure_logging()

# Client-facing text for framework errors; the raw detail is only logged
SAFE_HTTP_MESSAGES: dict[int, str] = {
    error.status_code: error.message
    for error in (ValidationError, AuthError, PermissionError, NotFoundError, ConflictError, StorageError)
}
SAFE_HTTP_MESSAGES[status.HTTP_405_METHOD_NOT_ALLOWED] = "Method not allowed"


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    exc: Exception | None = None,
) -> JSONResponse:
    log_message = f"[{code}] method={request.method} path={request.url.path} message={message}"
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(log_message, exc_info=exc)
    else:
        logger.warning(log_message)
    return JSONResponse(status_code=status_code, content=error_payload(code, message, details))


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details, exc)


async def handle_http_exception(
    request: Request, exc: HTTPException | StarletteHTTPException
) -> JSONResponse:
    # Routing failures (unknown path, wrong method) arrive here
    if exc.status_code in SAFE_HTTP_MESSAGES:
        message = SAFE_HTTP_MESSAGES[exc.status_code]
    elif exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        message = InternalError.message
    else:
        message = "Request failed"
    details = exc.detail if exc.detail != message else None
    return _error_response(request, exc.status_code, resolve_error_code(exc.status_code), message, details)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # ctx may carry the raised ValueError itself, so keep only the plain fields
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ValidationError.code,
        "Request validation failed",
        errors,
    )


async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        InternalError.code,
        InternalError.message,
        exc=exc,
    )


def _register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unhandled_exception)


def create_app(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
) -> FastAPI:
    """Build the dashboard application.

    Args:
        settings: Defaults to the environment settings
        storage: Backend to use instead of the one selected by settings
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        backend = storage if storage is not None else create_storage(settings)
        logger.info(
            "Starting application storage=%s page_size=%d",
            type(backend).__name__,
            settings.default_page_size,
        )
        if settings.debug:
            logger.warning("DEBUG=true, do not use in production")

        try:
            app.state.settings = settings
            app.state.storage = backend
            app.state.auth_session = AuthSession.restored(backend)
            app.state.stores = build_stores(backend)
            app.state.table_states = {}

            yield
        finally:
            backend.close()
            logger.info("Application stopped")

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    for router in (auth.router, dashboard.router, *records.routers):
        app.include_router(router)

    _register_error_handlers(app)

    @app.get("/health", tags=["health"])
    async def healthcheck() -> JSONResponse:
        try:
            app.state.storage.keys()
        except StorageError as exc:
            logger.error("Healthcheck storage probe failed: %s", exc.details)
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "error"}
            )
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})

    return app


app = create_app()
