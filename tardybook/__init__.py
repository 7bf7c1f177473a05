"""Student tardiness records: rosters, daily entries and monthly reports."""
from tardybook.model import (
    AppState,
    ClassData,
    CombinedMonthlyTardinessReport,
    DailyTardinessEntry,
    MonthlyTardinessReport,
)
from tardybook.reports import compute_combined_report, compute_daily_report, compute_monthly_report
from tardybook.session import TardinessBook
from tardybook.storage import JsonFileStorage, load_app_state
from tardybook.store import clear_late, mark_late, replace_roster

__all__ = [
    "AppState",
    "ClassData",
    "CombinedMonthlyTardinessReport",
    "DailyTardinessEntry",
    "MonthlyTardinessReport",
    "compute_combined_report",
    "compute_daily_report",
    "compute_monthly_report",
    "TardinessBook",
    "JsonFileStorage",
    "load_app_state",
    "clear_late",
    "mark_late",
    "replace_roster",
]
