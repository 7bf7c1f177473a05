"""
Unit tests for report computation.

- monthly/combined rows only for students with at least one late day
- total_minutes = sum of minutes, late_count = number of dates
- same student name in two classes -> two rows
- sorted by total_minutes descending, ties keep accumulation order
"""

import unittest
from datetime import date

from tardybook.model import ClassData, CombinedMonthlyTardinessReport, MonthlyTardinessReport
from tardybook.reports import (
    compute_combined_report,
    compute_daily_report,
    compute_monthly_report,
    month_label,
    month_token,
    parse_month_token,
)
from tardybook.store import mark_late, replace_roster


class TestMonthTokens(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertEqual(parse_month_token("2025-05"), (2025, 5))
        self.assertEqual(parse_month_token(" 2025-05-17 "), (2025, 5))
        self.assertEqual(parse_month_token((2025, 12)), (2025, 12))

    def test_parse_invalid(self) -> None:
        for bad in ("", "2025", "May 2025", "2025-13", "2025-00", "25-05"):
            with self.assertRaises(ValueError):
                parse_month_token(bad)

    def test_month_token(self) -> None:
        self.assertEqual(month_token(date(2025, 5, 3)), "2025-05")
        self.assertEqual(month_token("2025-11-30"), "2025-11")

    def test_month_label(self) -> None:
        self.assertEqual(month_label("2025-05"), "Mei 2025")
        self.assertEqual(month_label("2024-12-01"), "Desember 2024")


class TestMonthlyReport(unittest.TestCase):
    def test_scenario_two_days_same_month(self) -> None:
        data = ClassData(students=["Ana", "Budi"], records={})
        data = mark_late(data, "2025-05-03", "Ana", 10)
        data = mark_late(data, "2025-05-10", "Ana", 5)

        report = compute_monthly_report(data, "2025-05")
        self.assertEqual(report, [MonthlyTardinessReport(student_name="Ana", total_minutes=15, late_count=2)])

    def test_roster_replacement_removes_student_from_reports(self) -> None:
        data = ClassData(students=["Ana", "Budi"], records={})
        data = mark_late(data, "2025-05-03", "Ana", 10)
        data = mark_late(data, "2025-05-04", "Budi", 1)
        data = replace_roster(data, "Budi")

        names = [r.student_name for r in compute_monthly_report(data, "2025-05")]
        self.assertEqual(names, ["Budi"])

    def test_other_months_and_bad_keys_excluded_padded_keys_counted(self) -> None:
        data = ClassData(
            students=["Ana"],
            records={
                "2025-04-30": {"Ana": 100},
                "2025-05-01": {"Ana": 2},
                "2024-05-01": {"Ana": 50},
                "not-a-date": {"Ana": 7},
                " 2025-05-03 ": {"Ana": 4},
                "2025-5-02": {"Ana": 9},
            },
        )
        report = compute_monthly_report(data, "2025-05")
        self.assertEqual(report, [MonthlyTardinessReport("Ana", 6, 2)])

    def test_sorted_desc_with_stable_ties(self) -> None:
        data = ClassData(
            students=["Ana", "Budi", "Citra"],
            records={
                "2025-05-01": {"Ana": 5, "Budi": 20, "Citra": 5},
            },
        )
        report = compute_monthly_report(data, "2025-05")
        self.assertEqual([r.student_name for r in report], ["Budi", "Ana", "Citra"])

    def test_no_rows_for_empty_month(self) -> None:
        data = ClassData(students=["Ana"], records={"2025-05-01": {"Ana": 5}})
        self.assertEqual(compute_monthly_report(data, "2025-06"), [])


class TestCombinedReport(unittest.TestCase):
    def test_same_name_in_two_classes_gives_two_rows(self) -> None:
        state = {
            "A": ClassData(students=["Ana"], records={"2025-05-03": {"Ana": 10}}),
            "B": ClassData(students=["Ana"], records={"2025-05-04": {"Ana": 20}}),
        }
        report = compute_combined_report(state, "2025-05")
        self.assertEqual(
            report,
            [
                CombinedMonthlyTardinessReport(student_name="Ana", total_minutes=20, late_count=1, class_name="B"),
                CombinedMonthlyTardinessReport(student_name="Ana", total_minutes=10, late_count=1, class_name="A"),
            ],
        )

    def test_totals_per_class(self) -> None:
        state = {
            "A": ClassData(
                students=["Ana", "Budi"],
                records={"2025-05-01": {"Ana": 3, "Budi": 4}, "2025-05-02": {"Ana": 3}, "2025-06-01": {"Budi": 99}},
            ),
            "B": ClassData(students=[], records={}),
        }
        report = compute_combined_report(state, "2025-05")
        as_tuples = [(r.class_name, r.student_name, r.total_minutes, r.late_count) for r in report]
        self.assertEqual(as_tuples, [("A", "Ana", 6, 2), ("A", "Budi", 4, 1)])

    def test_empty_state(self) -> None:
        self.assertEqual(compute_combined_report({}, "2025-05"), [])


class TestDailyReport(unittest.TestCase):
    def test_sorted_by_minutes(self) -> None:
        data = ClassData(students=["Ana", "Budi"], records={"2025-05-01": {"Ana": 3, "Budi": 9}})
        rows = compute_daily_report(data, "2025-05-01")
        self.assertEqual([(r.student_name, r.minutes) for r in rows], [("Budi", 9), ("Ana", 3)])
        self.assertEqual(compute_daily_report(data, "2025-05-02"), [])


if __name__ == "__main__":
    unittest.main()
