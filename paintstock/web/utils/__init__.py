"""Web utilities."""

from __future__ import annotations

from paintstock.web.utils.exporters import to_csv, to_stock_status_xlsx, to_xlsx

__all__ = ["to_csv", "to_stock_status_xlsx", "to_xlsx"]
