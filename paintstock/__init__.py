"""Paint inventory dashboard backend: stock status, low-stock and KPI reporting."""

__version__ = "0.4.0"
