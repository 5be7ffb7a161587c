"""Prometheus metrics for monitoring."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Info

# HTTP Request metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method", "endpoint"],
)

# Report metrics
stock_status_rows_total = Counter(
    "stock_status_rows_total",
    "Stock status rows produced",
    ["bucket"],  # interior, exterior
)

low_stock_items = Gauge(
    "low_stock_items",
    "Low-stock pairs in the latest dashboard computation",
    ["urgency"],  # critical, warning, low
)

reorders_submitted_total = Counter(
    "reorders_submitted_total",
    "Reorder transactions created",
)

reports_generated_total = Counter(
    "reports_generated_total",
    "Analysis reports computed",
    ["report"],  # purchases, sales_analysis, inventory, sales
)

# Database metrics
data_fetch_errors_total = Counter(
    "data_fetch_errors_total",
    "Failed reads from the inventory database",
    ["source"],  # products, transactions
)

# Application info
app_info = Info("paintstock_app", "Application version information")
