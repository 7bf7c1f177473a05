"""
Report computation.

Reports are derived views, recomputed from the current state on demand:

- daily report: who was late on one date (one class)
- monthly report: per-student totals for one class within a month
- combined report: per (class, student) totals for all classes within a month

A date belongs to a month when its parsed (year, month) equals the target.
Date keys that do not parse as YYYY-MM-DD are skipped, never an error.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from tardybook.model import (
    AppState,
    ClassData,
    CombinedMonthlyTardinessReport,
    DailyTardinessEntry,
    MonthlyTardinessReport,
)

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-\d{1,2})?$")

# Month names for display (id-ID)
MONTH_NAMES = [
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
]

Month = tuple[int, int]


def _date_key_month(key: str) -> Optional[Month]:
    """
    (year, month) of a record's date key, or None if it is not YYYY-MM-DD.
    """
    m = _DATE_RE.match(str(key).strip())
    if not m:
        return None
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def parse_month_token(token: str | Month) -> Month:
    """
    Parse 'YYYY-MM' (or a full 'YYYY-MM-DD' date) into (year, month).
    Raises ValueError for anything else.
    """
    if isinstance(token, tuple):
        year, month = token
    else:
        m = _MONTH_RE.match(str(token).strip())
        if not m:
            raise ValueError(f"Invalid month: {token!r} (expected YYYY-MM)")
        year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month value: {token!r}")
    return year, month


def month_token(value: date | datetime | str) -> str:
    """
    'YYYY-MM' for a date, or for an ISO date string.
    """
    if isinstance(value, (date, datetime)):
        return f"{value.year:04d}-{value.month:02d}"
    year, month = parse_month_token(value)
    return f"{year:04d}-{month:02d}"


def month_label(month: str | Month) -> str:
    year, m = parse_month_token(month)
    return f"{MONTH_NAMES[m - 1]} {year}"


def compute_daily_report(class_data: ClassData, day: str) -> list[DailyTardinessEntry]:
    daily = class_data.records.get(day, {})
    rows = [DailyTardinessEntry(student_name=name, minutes=minutes) for name, minutes in daily.items()]
    rows.sort(key=lambda r: r.minutes, reverse=True)
    return rows


def _accumulate(class_data: ClassData, target: Month, totals: dict, class_name: Optional[str] = None) -> None:
    # totals: key -> [total_minutes, late_count]; dict order = accumulation order
    for day, daily in class_data.records.items():
        if _date_key_month(day) != target:
            continue
        for student_name, minutes in daily.items():
            key = (class_name, student_name)
            entry = totals.setdefault(key, [0, 0])
            entry[0] += minutes
            entry[1] += 1


def compute_monthly_report(class_data: ClassData, month: str | Month) -> list[MonthlyTardinessReport]:
    """
    Per-student totals of one class within a month, most minutes first.

    Students without a late day in the month do not get a row.
    Ties keep accumulation order (sort is stable).
    """
    target = parse_month_token(month)
    totals: dict[tuple[Optional[str], str], list[int]] = {}
    _accumulate(class_data, target, totals)

    rows = [
        MonthlyTardinessReport(student_name=student, total_minutes=total, late_count=count)
        for (_, student), (total, count) in totals.items()
    ]
    rows.sort(key=lambda r: r.total_minutes, reverse=True)
    return rows


def compute_combined_report(app_state: AppState, month: str | Month) -> list[CombinedMonthlyTardinessReport]:
    """
    Per (class, student) totals over all classes within a month.

    The same name in two classes is two different students: two rows.
    """
    target = parse_month_token(month)
    totals: dict[tuple[Optional[str], str], list[int]] = {}
    for class_name, class_data in app_state.items():
        _accumulate(class_data, target, totals, class_name=class_name)

    rows = [
        CombinedMonthlyTardinessReport(
            student_name=student,
            total_minutes=total,
            late_count=count,
            class_name=class_name or "",
        )
        for (class_name, student), (total, count) in totals.items()
    ]
    rows.sort(key=lambda r: r.total_minutes, reverse=True)
    return rows
