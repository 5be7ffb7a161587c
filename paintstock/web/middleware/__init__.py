"""FastAPI middleware."""

from __future__ import annotations

from paintstock.web.middleware.prometheus import PrometheusMiddleware

__all__ = ["PrometheusMiddleware"]
