"""Middleware for logging API requests."""
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.utils.network import get_client_addresses

logger = logging.getLogger(__name__)


class ApiRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log every request with the address it was answered with."""

    async def dispatch(self, request: Request, call_next):
        """Process the request and log it."""
        started = time.perf_counter()
        response = await call_next(request)

        # Don't break the app if logging fails
        try:
            elapsed_ms = (time.perf_counter() - started) * 1000

            # Endpoints that resolved the address (fallback included) leave it on the state
            addresses = getattr(request.state, "addresses", None)
            if addresses is None:
                addresses = get_client_addresses(request)

            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"client={addresses.primary} ({addresses.version.value}) {elapsed_ms:.1f}ms"
            )
        except Exception as e:
            logger.error(f"Failed to log API request: {e}")

        return response
