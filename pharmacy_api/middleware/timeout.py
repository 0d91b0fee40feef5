"""
Request timeout middleware.

Lookups and interaction checks fan out to the label API and several AI
calls, so they get a longer budget than the default.
"""

import asyncio
import logging
from typing import Dict, Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from pharmacy_api.utils.error_responses import error_json_response

logger = logging.getLogger(__name__)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Return a 504 error body when a request exceeds its time budget."""

    def __init__(
        self,
        app,
        timeout_seconds: float = 60.0,
        enabled: bool = True,
        api_prefix: str = "/api/v1",
        long_timeout_endpoints: Optional[Dict[str, float]] = None,
    ):
        """
        Args:
            app: ASGI application
            timeout_seconds: Default maximum request duration in seconds
            enabled: Enable/disable the middleware
            api_prefix: Prefix the API routes are mounted under
            long_timeout_endpoints: Path -> timeout overrides
        """
        super().__init__(app)
        self.timeout_seconds = timeout_seconds
        self.enabled = enabled

        if long_timeout_endpoints is None:
            long_timeout_endpoints = {
                f"{api_prefix}/lookup": max(timeout_seconds, 120.0),
                f"{api_prefix}/interactions": max(timeout_seconds, 90.0),
            }
        self.long_timeout_endpoints = long_timeout_endpoints

    def _get_timeout_for_path(self, path: str) -> float:
        for endpoint, timeout in self.long_timeout_endpoints.items():
            if path.startswith(endpoint):
                return timeout
        return self.timeout_seconds

    async def dispatch(self, request: Request, call_next):
        if not self.enabled or request.url.path == "/health":
            return await call_next(request)

        timeout = self._get_timeout_for_path(request.url.path)

        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Request timeout for %s %s (timeout: %.1fs)",
                request.method,
                request.url.path,
                timeout,
            )
            return error_json_response(
                request,
                status.HTTP_504_GATEWAY_TIMEOUT,
                f"Request timeout: operation exceeded {timeout} seconds",
                error_type="Timeout",
                headers={"Retry-After": "30"},
            )
