"""
Request ID tracking middleware for log correlation.
"""
import uuid
import time
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add unique request ID to each request.
    Reuses an incoming X-Request-ID header when present.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.time()
        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "status": "started",
            },
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.time() - start) * 1000)
            logger.error(
                f"Request failed: {str(e)}",
                extra={"request_id": request_id, "duration_ms": duration_ms},
                exc_info=True,
            )
            raise

        response.headers["X-Request-ID"] = request_id
        duration_ms = int((time.time() - start) * 1000)
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "status": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


def get_request_id(request: Request) -> str:
    """Request ID from request state, or "unknown" outside the middleware."""
    return getattr(request.state, "request_id", "unknown")
