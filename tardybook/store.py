"""
Tardiness store: pure state transforms on ClassData.

Every function returns a new ClassData and leaves its input untouched.
Invariant kept by all of them: no date ever maps to an empty record.

Membership of student names is not checked in mark_late / clear_late;
stale names are only purged when the roster is replaced.
"""

from __future__ import annotations

import logging
from typing import Iterable

from tardybook.model import AppState, ClassData, TardinessRecord

log = logging.getLogger(__name__)


def parse_roster_text(text: str | Iterable[str]) -> list[str]:
    """
    Turn raw roster input into an ordered list of unique names.

    Accepts multi-line text (one name per line) or an iterable of lines.
    Lines are trimmed, blank lines dropped, duplicates collapse onto
    their first appearance.
    """
    lines = text.splitlines() if isinstance(text, str) else list(text)

    names: list[str] = []
    seen: set[str] = set()
    for line in lines:
        name = str(line).strip()
        if not name or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


def replace_roster(class_data: ClassData, roster_text: str | Iterable[str]) -> ClassData:
    """
    Replace the roster and drop every record entry of students not on it.
    """
    students = parse_roster_text(roster_text)
    valid = set(students)

    records: dict[str, TardinessRecord] = {}
    dropped = 0
    for date, daily in class_data.records.items():
        kept = {name: minutes for name, minutes in daily.items() if name in valid}
        dropped += len(daily) - len(kept)
        if kept:
            records[date] = kept

    if dropped:
        log.info("Roster replaced: %d late entries purged for removed students", dropped)
    return ClassData(students=students, records=records)


def mark_late(class_data: ClassData, date: str, student_name: str, minutes: int) -> ClassData:
    """
    Set (or overwrite) the minutes a student was late on a date.
    """
    new = class_data.copy()
    new.records.setdefault(date, {})[student_name] = minutes
    return new


def clear_late(class_data: ClassData, date: str, student_name: str) -> ClassData:
    """
    Remove a student's entry for a date; no-op when there is none.
    """
    new = class_data.copy()
    daily = new.records.get(date)
    if daily is None:
        return new

    daily.pop(student_name, None)
    if not daily:
        del new.records[date]
    return new


def get_daily_record(class_data: ClassData, date: str) -> TardinessRecord:
    return dict(class_data.records.get(date, {}))


def initial_app_state(class_names: Iterable[str]) -> AppState:
    """
    Empty roster and records for every predefined class.
    """
    return {name: ClassData.empty() for name in class_names}
