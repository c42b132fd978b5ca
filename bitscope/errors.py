"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BitScopeError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(BitScopeError):
    """The explorer API was unreachable, rate-limited or returned garbage."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Upstream request {path} failed: {reason}", status_code=502)
        self.path = path
        self.reason = reason


class TransactionFetchError(BitScopeError):
    def __init__(self):
        super().__init__("Transaction fetch failed", status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(BitScopeError)
    async def handle_bitscope_error(_request: Request, exc: BitScopeError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
