"""Spreadsheet export of registrations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from io import BytesIO
from typing import Any, Final

import openpyxl
from openpyxl.utils import get_column_letter

XLSX_MEDIA_TYPE: Final[str] = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TITLE: Final[str] = "Registrations"

# (header, source key, column width in characters)
COLUMNS: Final[tuple[tuple[str, str, int], ...]] = (
    ("ID", "id", 5),
    ("Name", "name", 25),
    ("Email", "email", 30),
    ("Contact", "contact", 15),
    ("Program", "program", 20),
    ("Semester", "semester", 10),
    ("Roll No", "rollno", 15),
    ("Event", "event", 35),
    ("Team", "team", 20),
    ("Transaction ID", "transaction_id", 20),
    ("Account No", "account_no", 15),
    ("Registration Date", "created_at", 25),
)


def format_registration_date(value: datetime) -> str:
    """Render a timestamp as ``MM/DD/YYYY, HH:MM:SS AM``."""
    return value.strftime("%m/%d/%Y, %I:%M:%S %p")


def _cell_value(key: str, row: Mapping[str, Any]) -> Any:
    value = row.get(key)
    if key == "team":
        return value or "N/A"
    if key == "created_at" and isinstance(value, datetime):
        return format_registration_date(value)
    return value


def build_workbook(rows: Iterable[Mapping[str, Any]]) -> bytes:
    """Return an ``.xlsx`` document with one row per registration."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append([header for header, _, _ in COLUMNS])
    for row in rows:
        ws.append([_cell_value(key, row) for _, key, _ in COLUMNS])

    for index, (_, _, width) in enumerate(COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_filename(today: date) -> str:
    return f"Technofest_Registrations_{today.isoformat()}.xlsx"
