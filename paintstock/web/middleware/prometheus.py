"""Prometheus metrics middleware for FastAPI."""

from __future__ import annotations

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from paintstock.core.logging import set_request_id
from paintstock.core.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

REQUEST_ID_HEADER = "X-Request-ID"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collect HTTP metrics and bind a request id for log correlation."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics."""
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))

        method = request.method
        endpoint = self._normalize_path(request.url.path)

        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()

        start_time = time.time()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
        finally:
            duration = time.time() - start_time
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                duration
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _normalize_path(self, path: str) -> str:
        """Normalize path by replacing IDs with placeholders.

        Examples:
            /api/v1/reorders/42 -> /api/v1/reorders/{id}
            /api/v1/export/stock-status-interior.xlsx -> unchanged
        """
        parts = path.split("/")
        return "/".join("{id}" if part.isdigit() else part for part in parts)
