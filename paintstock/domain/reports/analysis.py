"""Purchase and sales analysis over an inclusive date range.

NO DATA ACCESS - pure functions only. Data access happens in services layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from pydantic import BaseModel

from paintstock.domain.stock.daily_status import transactions_between
from paintstock.domain.stock.records import TransactionRecord, TransactionType

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Export headers; quantity/amount columns differ per analysis
PURCHASE_HEADERS = ["Date", "Product Name", "Size", "Base", "Quantity Received", "Total Cost"]
SALES_HEADERS = ["Date", "Product Name", "Size", "Base", "Quantity sold", "Total Sales"]
MONTHLY_HEADERS = [
    "Month",
    "Total Sales",
    "Total Cost",
    "Total Profit",
    "Top-Selling Product (Qty)",
    "Lowest-Selling Product (Qty)",
]


class AnalysisRow(BaseModel):
    """One transaction line of a purchase or sales analysis."""

    day: date
    product_name: str
    size: str
    base_name: str
    quantity: int
    amount: float


class AnalysisReport(BaseModel):
    """Transactions of one type within [start, end] and their total amount."""

    type: TransactionType
    start: date
    end: date
    rows: list[AnalysisRow]
    total: float


class MonthlySummaryRow(BaseModel):
    """Sales, cost and best/worst seller of one calendar month."""

    month: str
    total_sales: float
    total_cost: float
    total_profit: float
    top_product: str
    lowest_product: str


class SalesAnalysisReport(AnalysisReport):
    """Sales analysis plus the monthly summary of the same range."""

    monthly: list[MonthlySummaryRow]


def range_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """[start 00:00, day after end 00:00); the end day is included.

    Raises:
        ValueError: If end is before start

    """
    if end < start:
        raise ValueError(f"end date {end} is before start date {start}")
    begin = datetime(start.year, start.month, start.day)
    return begin, datetime(end.year, end.month, end.day) + timedelta(days=1)


def analyse_transactions(
    transactions: Iterable[TransactionRecord],
    tx_type: TransactionType,
    start: date,
    end: date,
) -> AnalysisReport:
    """Rows and total for transactions of ``tx_type`` dated within the range.

    Dated by transaction date, falling back to creation time. Missing names
    and sizes read "Unknown".

    Examples:
        purchase of 10 @ 4500 on 2025-03-10, range 2025-03-10..2025-03-10
        -> one row (day 2025-03-10, qty 10, amount 4500.0), total 4500.0

    """
    lo, hi = range_bounds(start, end)
    selected = [t for t in transactions_between(transactions, lo, hi) if t.type == tx_type]
    selected.sort(key=lambda t: t.occurred_at)

    rows = [
        AnalysisRow(
            day=t.occurred_at.date(),
            product_name=t.product_name or "Unknown",
            size=t.product_size or "Unknown",
            base_name=t.base_name or "Unknown",
            quantity=t.quantity,
            amount=round(t.total_amount, 2),
        )
        for t in selected
    ]
    total = round(sum(t.total_amount for t in selected), 2)
    return AnalysisReport(type=tx_type, start=start, end=end, rows=rows, total=total)


def purchase_analysis(
    transactions: Iterable[TransactionRecord], start: date, end: date
) -> AnalysisReport:
    """Purchases received within the range."""
    return analyse_transactions(transactions, TransactionType.PURCHASE, start, end)


def monthly_summary(
    transactions: Iterable[TransactionRecord], start: date, end: date
) -> list[MonthlySummaryRow]:
    """Per-month sales, purchase cost, profit and top/lowest sellers by quantity.

    Months are in calendar order. The lowest seller is a product with zero
    units sold if any, otherwise the one with the fewest units.
    """
    lo, hi = range_bounds(start, end)
    months: dict[tuple[int, int], dict] = {}
    for t in transactions_between(transactions, lo, hi):
        if t.type not in (TransactionType.SALE, TransactionType.PURCHASE):
            continue
        key = (t.occurred_at.year, t.occurred_at.month)
        month = months.setdefault(key, {"sales": 0.0, "cost": 0.0, "quantities": {}})
        if t.type == TransactionType.SALE:
            month["sales"] += t.total_amount
            product = f"{t.product_name or 'Unknown'} ({t.base_name or 'Unknown'})"
            month["quantities"][product] = month["quantities"].get(product, 0) + t.quantity
        else:
            month["cost"] += t.total_amount

    summary = []
    for (year, month_no), data in sorted(months.items()):
        ranked = sorted(data["quantities"].items(), key=lambda kv: kv[1], reverse=True)
        top = ranked[0][0] if ranked else "N/A"
        zero = [name for name, qty in ranked if qty == 0]
        if zero:
            lowest = zero[0]
        else:
            lowest = ranked[-1][0] if ranked else "N/A"
        summary.append(
            MonthlySummaryRow(
                month=f"{MONTH_NAMES[month_no - 1]} {year}",
                total_sales=round(data["sales"], 2),
                total_cost=round(data["cost"], 2),
                total_profit=round(data["sales"] - data["cost"], 2),
                top_product=top,
                lowest_product=lowest,
            )
        )
    return summary


def sales_analysis(
    transactions: Iterable[TransactionRecord], start: date, end: date
) -> SalesAnalysisReport:
    """Sales within the range with the monthly summary attached."""
    transactions = list(transactions)
    report = analyse_transactions(transactions, TransactionType.SALE, start, end)
    return SalesAnalysisReport(
        **report.model_dump(), monthly=monthly_summary(transactions, start, end)
    )


def analysis_export_rows(report: AnalysisReport) -> tuple[list[str], list[dict]]:
    """Headers and header-keyed rows for exporting an analysis, total row last."""
    headers = SALES_HEADERS if report.type == TransactionType.SALE else PURCHASE_HEADERS
    date_h, name_h, size_h, base_h, qty_h, amount_h = headers
    rows: list[dict] = [
        {
            date_h: row.day.isoformat(),
            name_h: row.product_name,
            size_h: row.size,
            base_h: row.base_name,
            qty_h: row.quantity,
            amount_h: row.amount,
        }
        for row in report.rows
    ]
    rows.append({date_h: "Total", amount_h: report.total})
    return headers, rows


def monthly_export_rows(rows: Iterable[MonthlySummaryRow]) -> list[dict]:
    """Header-keyed monthly summary rows."""
    return [
        dict(
            zip(
                MONTHLY_HEADERS,
                (
                    row.month,
                    row.total_sales,
                    row.total_cost,
                    row.total_profit,
                    row.top_product,
                    row.lowest_product,
                ),
            )
        )
        for row in rows
    ]
