"""
CSV export of monthly reports.

Columns follow the report tables:

    monthly:  no, student, total_minutes, late_days
    combined: no, student, class, total_minutes, late_days
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from tardybook.model import CombinedMonthlyTardinessReport, MonthlyTardinessReport

MONTHLY_FIELDS = ["no", "student", "total_minutes", "late_days"]
COMBINED_FIELDS = ["no", "student", "class", "total_minutes", "late_days"]


def monthly_report_rows(rows: Sequence[MonthlyTardinessReport]) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for i, r in enumerate(rows, start=1):
        out.append(
            {
                "no": str(i),
                "student": r.student_name,
                "total_minutes": str(r.total_minutes),
                "late_days": str(r.late_count),
            }
        )
    return out


def combined_report_rows(rows: Sequence[CombinedMonthlyTardinessReport]) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for i, r in enumerate(rows, start=1):
        out.append(
            {
                "no": str(i),
                "student": r.student_name,
                "class": r.class_name,
                "total_minutes": str(r.total_minutes),
                "late_days": str(r.late_count),
            }
        )
    return out


def _write_csv(rows: list[dict[str, str]], fieldnames: list[str], out_path: str | Path) -> int:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)


def export_monthly_csv(rows: Sequence[MonthlyTardinessReport], out_path: str | Path) -> int:
    """
    Write a class's monthly report to CSV. Returns number of rows written.
    """
    return _write_csv(monthly_report_rows(rows), MONTHLY_FIELDS, out_path)


def export_combined_csv(rows: Sequence[CombinedMonthlyTardinessReport], out_path: str | Path) -> int:
    """
    Write the all-classes report to CSV. Returns number of rows written.
    """
    return _write_csv(combined_report_rows(rows), COMBINED_FIELDS, out_path)
