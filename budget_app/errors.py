"""
API error type and the exception handlers that render it.

Every failure leaves the API as `{"error": <message>, "code": <CODE>}`,
except unexpected ones, which become a 500 without a code.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failure with an HTTP status and a machine-readable code"""

    def __init__(self, status_code: int, code: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message

    @classmethod
    def bad_request(cls, code: str, message: str) -> "ApiError":
        return cls(400, code, message)

    @classmethod
    def not_found(cls, code: str, message: str) -> "ApiError":
        return cls(404, code, message)


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code}
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": f"Internal server error: {exc}"}
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
