"""
Error Handler Middleware

Correlation IDs for every request and sanitized error responses.
Message text never appears in error logs or bodies.
"""

from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from gilgrimi.config.logging_config import get_logger, bind_correlation_id, clear_context
from gilgrimi.infrastructure.monitoring import capture_exception_with_context
from gilgrimi.infrastructure.state.state_store import StateStoreError

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _error_response(status_code: int, error: str, message: str, correlation_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "correlation_id": correlation_id,
            "message": message,
        },
        headers={CORRELATION_HEADER: correlation_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - 503 for conversation state storage failures
    - 500 with a sanitized body for anything else
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid4())
        bind_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        except StateStoreError as e:
            logger.error(
                "Conversation state unavailable",
                path=request.url.path,
                error_type=type(e.original_error).__name__ if e.original_error else None,
            )
            capture_exception_with_context(e, correlation_id=correlation_id)
            return _error_response(
                503,
                "State storage unavailable",
                "Your message could not be processed. Please try again.",
                correlation_id,
            )

        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
            )
            capture_exception_with_context(e, correlation_id=correlation_id)
            return _error_response(
                500,
                "Internal server error",
                "An unexpected error occurred. Please try again.",
                correlation_id,
            )

        finally:
            clear_context()
