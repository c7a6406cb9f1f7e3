"""
Global exception handlers.

Every error leaves the API as a JSON body with an ``error`` key, matching the
shape the form endpoints return for validation and delivery failures.

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        # Body could not be decoded into the expected shape (e.g. not JSON)
        logger.warning(
            "Rejected undecodable body on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        Logs the full traceback and returns a generic message; debug mode
        adds the exception type and text.
        """
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        if settings.DEBUG:
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "error_type": type(exc).__name__,
                    "details": str(exc),
                    "path": request.url.path,
                },
            )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error"},
        )
