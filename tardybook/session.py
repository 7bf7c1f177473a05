"""
TardinessBook: the single owner of the application state.

A TardinessBook is created once at startup with a storage collaborator.
It rehydrates the state, keeps the selected class and date, and saves the
whole state after every mutation. UI layers (CLI, interactive menu) only
talk to this object.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional

from tardybook import reports, store
from tardybook.config import CLASS_NAMES, DEFAULT_STORAGE_KEY
from tardybook.model import (
    AppState,
    ClassData,
    CombinedMonthlyTardinessReport,
    DailyTardinessEntry,
    MonthlyTardinessReport,
    TardinessRecord,
)
from tardybook.storage import JsonFileStorage, load_app_state

log = logging.getLogger(__name__)


def clamp_minutes(value: Any) -> int:
    """
    Minutes late as an int >= 1. Anything unparsable counts as 1.
    """
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, minutes)


def parse_date(value: date | str) -> str:
    """
    Validate a date and return it as 'YYYY-MM-DD'. Raises ValueError.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value).strip()).isoformat()


class TardinessBook:
    def __init__(
        self,
        storage: JsonFileStorage,
        key: str = DEFAULT_STORAGE_KEY,
        class_names: Iterable[str] = CLASS_NAMES,
        today: Optional[date] = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._class_names = list(class_names)
        if not self._class_names:
            raise ValueError("At least one class name is required")

        self._state: AppState = load_app_state(storage, self._class_names, key=key)
        self._selected_class = self._class_names[0]
        self._selected_date = parse_date(today or date.today())

    # --- read side -------------------------------------------------------

    @property
    def state(self) -> AppState:
        """Snapshot copy of the whole state."""
        return {name: cd.copy() for name, cd in self._state.items()}

    @property
    def class_names(self) -> list[str]:
        return list(self._state.keys())

    @property
    def selected_class(self) -> str:
        return self._selected_class

    @property
    def selected_date(self) -> str:
        return self._selected_date

    @property
    def selected_month(self) -> str:
        return reports.month_token(self._selected_date)

    def class_data(self, class_name: Optional[str] = None) -> ClassData:
        name = class_name or self._selected_class
        if name not in self._state:
            raise ValueError(f"Unknown class: {name!r}")
        return self._state[name].copy()

    def daily_record(self, day: date | str | None = None) -> TardinessRecord:
        return store.get_daily_record(self._state[self._selected_class], self._day(day))

    def daily_report(self, day: date | str | None = None) -> list[DailyTardinessEntry]:
        return reports.compute_daily_report(self._state[self._selected_class], self._day(day))

    def monthly_report(self, month: Optional[str] = None) -> list[MonthlyTardinessReport]:
        return reports.compute_monthly_report(self._state[self._selected_class], month or self.selected_month)

    def combined_report(self, month: Optional[str] = None) -> list[CombinedMonthlyTardinessReport]:
        return reports.compute_combined_report(self._state, month or self.selected_month)

    # --- selection -------------------------------------------------------

    def select_class(self, class_name: str) -> None:
        if class_name not in self._state:
            raise ValueError(f"Unknown class: {class_name!r}")
        self._selected_class = class_name

    def select_date(self, value: date | str) -> None:
        self._selected_date = parse_date(value)

    # --- mutations (each one is persisted) -------------------------------

    def replace_roster(self, roster_text: str | Iterable[str]) -> ClassData:
        new = store.replace_roster(self._state[self._selected_class], roster_text)
        log.info("%s: roster saved (%d students)", self._selected_class, len(new.students))
        return self._update(new)

    def mark_late(self, student_name: str, minutes: Any = 1, day: date | str | None = None) -> ClassData:
        d = self._day(day)
        m = clamp_minutes(minutes)
        new = store.mark_late(self._state[self._selected_class], d, student_name, m)
        log.info("%s: %s late %d min on %s", self._selected_class, student_name, m, d)
        return self._update(new)

    def clear_late(self, student_name: str, day: date | str | None = None) -> ClassData:
        d = self._day(day)
        new = store.clear_late(self._state[self._selected_class], d, student_name)
        log.info("%s: cleared %s on %s", self._selected_class, student_name, d)
        return self._update(new)

    def _day(self, day: date | str | None) -> str:
        return self._selected_date if day is None else parse_date(day)

    def _update(self, class_data: ClassData) -> ClassData:
        self._state[self._selected_class] = class_data
        # best effort: a failed save keeps the in-memory change
        if not self._storage.save(self._key, self._state):
            log.warning("State not persisted after change to %s", self._selected_class)
        return class_data.copy()
