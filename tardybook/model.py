"""
Central data model definitions used across the project.

This module defines the canonical structure of the tardiness data so that:
- the store, the reports and the storage layer share the same field names
- the persisted JSON shape has exactly one definition (to_dict / from_dict)

Shapes:

    TardinessRecord  student name -> minutes late (one class, one date)
    DailyRecords     'YYYY-MM-DD' -> TardinessRecord
    ClassData        roster + DailyRecords of one class
    AppState         class name -> ClassData
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

TardinessRecord = Dict[str, int]
DailyRecords = Dict[str, TardinessRecord]


@dataclass
class ClassData:
    """
    Roster and daily tardiness records of one class.

    The store functions never mutate a ClassData in place;
    they always return a new one.
    """

    students: List[str] = field(default_factory=list)
    records: DailyRecords = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ClassData":
        return cls(students=[], records={})

    def copy(self) -> "ClassData":
        return ClassData(
            students=list(self.students),
            records={d: dict(rec) for d, rec in self.records.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "students": list(self.students),
            "records": {d: dict(rec) for d, rec in self.records.items()},
        }


AppState = Dict[str, ClassData]


@dataclass(frozen=True)
class DailyTardinessEntry:
    student_name: str
    minutes: int


@dataclass(frozen=True)
class MonthlyTardinessReport:
    """
    One row of a class's monthly report.

    late_count is the number of distinct late days, not the number of minutes.
    """

    student_name: str
    total_minutes: int
    late_count: int


@dataclass(frozen=True)
class CombinedMonthlyTardinessReport(MonthlyTardinessReport):
    """
    One row of the all-classes report, scoped to (class_name, student_name).
    """

    class_name: str = ""


def app_state_to_dict(state: AppState) -> dict[str, Any]:
    return {name: cd.to_dict() for name, cd in state.items()}
