"""CSV/XLSX export utilities."""

from __future__ import annotations

import csv
import io
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

# Stock status workbook styling
HEADER_FILL = "4B5EAA"
COLUMN_FILLS = ("F5F7FA", "E8ECEF")  # alternating by column
NEGATIVE_FONT = "FF0000"
NEGATIVE_COLUMN = "Variation (pcs)"
COLUMN_WIDTHS = [20, 10, 10]  # Product name, Size, Base; the rest use DEFAULT_WIDTH
DEFAULT_WIDTH = 15

_thin = Side(style="thin", color="000000")
_BORDER = Border(top=_thin, bottom=_thin, left=_thin, right=_thin)
_CENTER = Alignment(horizontal="center", vertical="center")


def to_csv(data: list[dict[str, Any]], columns: list[str]) -> str:
    """Convert data to CSV string.

    Args:
        data: List of dictionaries to export
        columns: Column names to include (in order)

    Returns:
        CSV string

    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(data)
    return output.getvalue()


def to_xlsx(data: list[dict[str, Any]], columns: list[str], sheet_name: str = "Data") -> bytes:
    """Convert data to XLSX bytes.

    Args:
        data: List of dictionaries to export
        columns: Column names to include (in order)
        sheet_name: Name for the Excel sheet

    Returns:
        XLSX file as bytes

    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    # Header row with bold font
    header_font = Font(bold=True)
    for col_idx, col_name in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")

    # Data rows
    for row_idx, row_data in enumerate(data, start=2):
        for col_idx, col_name in enumerate(columns, start=1):
            ws.cell(row=row_idx, column=col_idx, value=row_data.get(col_name))

    # Auto-adjust column widths
    for column_cells in ws.columns:
        max_length = 0
        column_letter = column_cells[0].column_letter
        for cell in column_cells:
            if cell.value:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def to_stock_status_xlsx(data: list[dict[str, Any]], columns: list[str]) -> bytes:
    """Stock status workbook in the report's house style.

    Header row is bold white on blue; data cells alternate fills by column
    and negative variations are shown in red.

    Args:
        data: Export rows keyed by header
        columns: Header strings, in column order

    Returns:
        XLSX file as bytes

    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Sheet1"

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(fill_type="solid", fgColor=HEADER_FILL)
    for col_idx, col_name in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = _CENTER
        cell.border = _BORDER

    fills = [PatternFill(fill_type="solid", fgColor=color) for color in COLUMN_FILLS]
    for row_idx, row_data in enumerate(data, start=2):
        for col_idx, col_name in enumerate(columns, start=1):
            value = row_data.get(col_name)
            cell = ws.cell(row=row_idx, column=col_idx, value=value)

            negative = col_name == NEGATIVE_COLUMN and isinstance(value, (int, float)) and value < 0
            cell.font = Font(color=NEGATIVE_FONT if negative else "000000")
            cell.fill = fills[(col_idx - 1) % 2]
            cell.alignment = _CENTER
            cell.border = _BORDER

    for col_idx in range(1, len(columns) + 1):
        width = COLUMN_WIDTHS[col_idx - 1] if col_idx <= len(COLUMN_WIDTHS) else DEFAULT_WIDTH
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
