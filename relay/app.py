"""FastAPI application exposing the messaging client."""

from __future__ import annotations

import json

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from msgclient.config import get_settings
from msgclient.types import ErrorKind, MessagingError

from .deps import get_message_service
from .logging_config import configure_logging, logger
from .routes import api_router

ERROR_STATUS = {
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_API_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.MESSAGE_NOT_RECEIVED: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def messaging_error_payload(exc: MessagingError) -> dict:
    return {
        "ok": False,
        "error": exc.kind.value,
        "errorCode": exc.error_code,
        "detail": exc.message,
        "failedMessageList": [
            failed.model_dump(mode="json", by_alias=True, exclude_none=True)
            for failed in exc.failed_messages
        ],
    }


# Register global exception handlers for consistent error responses across the API
def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers for provider, 422, HTTP, and 500 errors."""

    @app.exception_handler(MessagingError)
    async def _messaging_exception_handler(request: Request, exc: MessagingError):
        code = ERROR_STATUS.get(exc.kind, status.HTTP_502_BAD_GATEWAY)
        logger.warning("messaging error on %s: %s", request.url.path, exc)
        return JSONResponse(messaging_error_payload(exc), status_code=code)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("validation error", extra={"errors": exc.errors(), "path": str(request.url)})
        return JSONResponse(
            {"ok": False, "error": "Invalid request", "detail": json.loads(json.dumps(exc.errors(), default=str))},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        return JSONResponse({"ok": False, "error": detail}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return JSONResponse(
            {"ok": False, "error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.resolved_docs_url,
        redoc_url=None,
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        """Release the shared transport when the app stops."""
        if get_message_service.cache_info().currsize:
            get_message_service().close()
            get_message_service.cache_clear()
        logger.info("Relay shutdown complete")

    return app


# Configure logging early
configure_logging()
app = create_app()


__all__ = ["app", "create_app"]
