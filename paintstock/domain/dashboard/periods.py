"""Reporting periods and relative-time labels for the dashboard.

All datetimes are naive local wall time.
"""

from __future__ import annotations

from datetime import datetime, timedelta

EPOCH = datetime(1970, 1, 1)

SALES_TITLES = {
    "today": "Today Sales",
    "yesterday": "Yesterday Sales",
    "week": "This Week Sales",
    "month": "This Month Sales",
    "quarter": "This Quarter Sales",
    "year": "This Year Sales",
}


def _midnight(dt: datetime) -> datetime:
    return datetime(dt.year, dt.month, dt.day)


def _week_start(now: datetime) -> datetime:
    """Most recent Sunday at midnight (weeks start on Sunday)."""
    days_since_sunday = (now.weekday() + 1) % 7
    return _midnight(now - timedelta(days=days_since_sunday))


def _quarter_start_month(month: int) -> int:
    return (month - 1) // 3 * 3 + 1


def _add_months(year: int, month: int, months: int) -> datetime:
    index = year * 12 + (month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1)


def period_start(filter_name: str, now: datetime) -> datetime:
    """Start of a dashboard filter period.

    Filters: today, yesterday, week, month, quarter, year, all.
    Unknown filters fall back to today.

    Examples:
        >>> period_start("month", datetime(2025, 5, 17, 15, 30))
        datetime.datetime(2025, 5, 1, 0, 0)
        >>> period_start("week", datetime(2025, 5, 17, 15, 30))  # Saturday
        datetime.datetime(2025, 5, 11, 0, 0)

    """
    if filter_name == "yesterday":
        return _midnight(now - timedelta(days=1))
    if filter_name == "week":
        return _week_start(now)
    if filter_name == "month":
        return datetime(now.year, now.month, 1)
    if filter_name == "quarter":
        return datetime(now.year, _quarter_start_month(now.month), 1)
    if filter_name == "year":
        return datetime(now.year, 1, 1)
    if filter_name == "all":
        return EPOCH
    return _midnight(now)


def period_range(period: str, now: datetime) -> tuple[datetime, datetime]:
    """[start, end) of a report period: day, week, month, quarter or year.

    Unknown periods fall back to the current month.
    """
    if period == "day":
        start = _midnight(now)
        return start, start + timedelta(days=1)
    if period == "week":
        start = _week_start(now)
        return start, start + timedelta(days=7)
    if period == "quarter":
        start = datetime(now.year, _quarter_start_month(now.month), 1)
        return start, _add_months(start.year, start.month, 3)
    if period == "year":
        return datetime(now.year, 1, 1), datetime(now.year + 1, 1, 1)
    start = datetime(now.year, now.month, 1)
    return start, _add_months(start.year, start.month, 1)


def sales_title(filter_name: str) -> str:
    """KPI card title for the sales period."""
    return SALES_TITLES.get(filter_name, SALES_TITLES["today"])


def format_time_ago(ts: datetime, now: datetime) -> str:
    """Coarse relative time: hours, then days, then weeks."""
    hours = int((now - ts).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hours ago"

    days = hours // 24
    if days < 7:
        return f"{days} days ago"

    return f"{days // 7} weeks ago"
