"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    tardybook classes
    tardybook roster "MIPA 1" --file names.txt
    tardybook mark "MIPA 1" Ana --minutes 10 --date 2025-05-03
    tardybook clear "MIPA 1" Ana --date 2025-05-03
    tardybook daily "MIPA 1" --date 2025-05-03
    tardybook monthly "MIPA 1" --month 2025-05
    tardybook combined --month 2025-05
    tardybook export report.csv --month 2025-05
    tardybook interactive

Note:
- The interactive UI lives in tardybook/interactive.py
- This CLI prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tardybook.config import Settings, load_settings, setup_logging
from tardybook.export_csv import export_combined_csv, export_monthly_csv
from tardybook.reports import month_label, parse_month_token
from tardybook.session import TardinessBook
from tardybook.storage import JsonFileStorage


def build_book(settings: Settings) -> TardinessBook:
    """
    Create the state holder from settings.
    """
    storage = JsonFileStorage(settings.data_dir)
    return TardinessBook(storage, key=settings.storage_key, class_names=settings.class_names)


def _select(book: TardinessBook, class_name: str | None, day: str | None = None) -> bool:
    """
    Apply --class / --date style selections; print a message and return False on bad input.
    """
    if class_name is not None:
        try:
            book.select_class(class_name)
        except ValueError:
            print(f"Unknown class: {class_name} (known: {', '.join(book.class_names)})")
            return False
    if day is not None:
        try:
            book.select_date(day)
        except ValueError:
            print(f"Invalid date: {day} (expected YYYY-MM-DD)")
            return False
    return True


def _month_arg(book: TardinessBook, month: str | None) -> str | None:
    if not month:
        return book.selected_month
    try:
        year, m = parse_month_token(month)
    except ValueError:
        print(f"Invalid month: {month} (expected YYYY-MM)")
        return None
    return f"{year:04d}-{m:02d}"


def _cmd_classes(args: argparse.Namespace, book: TardinessBook) -> int:
    for name in book.class_names:
        print(f"{name} | {len(book.class_data(name).students)} students")
    return 0


def _cmd_roster(args: argparse.Namespace, book: TardinessBook) -> int:
    """
    Show the roster of a class, or replace it from a file / stdin.
    """
    if not _select(book, args.class_name):
        return 1

    if args.file:
        if args.file == "-":
            text = sys.stdin.read()
        else:
            try:
                text = Path(args.file).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print(f"Cannot read roster file: {exc}")
                return 1
        new = book.replace_roster(text)
        print(f"Roster saved: {book.selected_class} ({len(new.students)} students)")
        return 0

    students = book.class_data().students
    if not students:
        print("No students in this class yet.")
        return 0
    for i, name in enumerate(students, start=1):
        print(f"{i}. {name}")
    return 0


def _cmd_mark(args: argparse.Namespace, book: TardinessBook) -> int:
    if not _select(book, args.class_name, args.date):
        return 1

    student = (args.student or "").strip()
    if student not in book.class_data().students:
        print(f"Not on the roster of {book.selected_class}: {student}")
        return 1

    new = book.mark_late(student, args.minutes)
    minutes = new.records[book.selected_date][student]
    print(f"Marked late: {student} {minutes} min on {book.selected_date}")
    return 0


def _cmd_clear(args: argparse.Namespace, book: TardinessBook) -> int:
    if not _select(book, args.class_name, args.date):
        return 1

    student = (args.student or "").strip()
    if student not in book.daily_record():
        print(f"No late entry for {student} on {book.selected_date}")
        return 0

    book.clear_late(student)
    print(f"Cleared: {student} on {book.selected_date}")
    return 0


def _cmd_daily(args: argparse.Namespace, book: TardinessBook) -> int:
    if not _select(book, args.class_name, args.date):
        return 1

    rows = book.daily_report()
    print(f"Daily report {book.selected_class} ({book.selected_date})")
    if not rows:
        print("No students late on this day.")
        return 0
    for r in rows:
        print(f"- {r.student_name} | {r.minutes} min")
    return 0


def _cmd_monthly(args: argparse.Namespace, book: TardinessBook) -> int:
    if not _select(book, args.class_name):
        return 1
    month = _month_arg(book, args.month)
    if month is None:
        return 1

    rows = book.monthly_report(month)
    print(f"Monthly report {book.selected_class} - {month_label(month)}")
    if not rows:
        print("No late entries this month.")
        return 0
    for r in rows:
        print(f"- {r.student_name} | {r.total_minutes} min | {r.late_count} days")
    return 0


def _cmd_combined(args: argparse.Namespace, book: TardinessBook) -> int:
    month = _month_arg(book, args.month)
    if month is None:
        return 1

    rows = book.combined_report(month)
    print(f"Combined report - {month_label(month)}")
    if not rows:
        print("No late entries this month for any class.")
        return 0
    for i, r in enumerate(rows, start=1):
        print(f"{i}. {r.student_name} | {r.class_name} | {r.total_minutes} min | {r.late_count} days")
    return 0


def _cmd_export(args: argparse.Namespace, book: TardinessBook) -> int:
    """
    Export the monthly report of one class (--class) or the combined report to CSV.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .csv path.")
        return 1

    month = _month_arg(book, args.month)
    if month is None:
        return 1

    if args.class_name and not _select(book, args.class_name):
        return 1

    try:
        if args.class_name:
            n = export_monthly_csv(book.monthly_report(month), out_path)
        else:
            n = export_combined_csv(book.combined_report(month), out_path)
    except OSError as exc:
        print(f"Export failed: {exc}")
        return 1

    print(f"Exported {n} rows to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="tardybook", description="Student tardiness records")
    parser.add_argument("--data-dir", type=str, default=None, help="Directory of the state file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("classes", help="List classes")

    p_roster = sub.add_parser("roster", help="Show or replace a class roster")
    p_roster.add_argument("class_name", type=str, help="Class name (e.g. 'MIPA 1')")
    p_roster.add_argument("--file", type=str, default=None, help="Roster file, one name per line ('-' = stdin)")

    p_mark = sub.add_parser("mark", help="Mark a student late")
    p_mark.add_argument("class_name", type=str)
    p_mark.add_argument("student", type=str)
    p_mark.add_argument("--minutes", type=str, default="1", help="Minutes late (min 1)")
    p_mark.add_argument("--date", type=str, default=None, help="YYYY-MM-DD (default: today)")

    p_clear = sub.add_parser("clear", help="Remove a late entry")
    p_clear.add_argument("class_name", type=str)
    p_clear.add_argument("student", type=str)
    p_clear.add_argument("--date", type=str, default=None, help="YYYY-MM-DD (default: today)")

    p_daily = sub.add_parser("daily", help="Late students of one day")
    p_daily.add_argument("class_name", type=str)
    p_daily.add_argument("--date", type=str, default=None)

    p_monthly = sub.add_parser("monthly", help="Monthly report of one class")
    p_monthly.add_argument("class_name", type=str)
    p_monthly.add_argument("--month", type=str, default=None, help="YYYY-MM (default: this month)")

    p_combined = sub.add_parser("combined", help="Monthly report of all classes")
    p_combined.add_argument("--month", type=str, default=None)

    p_export = sub.add_parser("export", help="Export a monthly report to .csv")
    p_export.add_argument("out", type=str, help="Output file path (e.g. report.csv)")
    p_export.add_argument("--class", dest="class_name", type=str, default=None)
    p_export.add_argument("--month", type=str, default=None)

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.data_dir)
    setup_logging(settings.log_level)
    book = build_book(settings)

    handlers = {
        "classes": _cmd_classes,
        "roster": _cmd_roster,
        "mark": _cmd_mark,
        "clear": _cmd_clear,
        "daily": _cmd_daily,
        "monthly": _cmd_monthly,
        "combined": _cmd_combined,
        "export": _cmd_export,
    }
    if args.command in handlers:
        raise SystemExit(handlers[args.command](args, book))

    if args.command == "interactive":
        from tardybook.interactive import run_interactive

        run_interactive(book)
        raise SystemExit(0)

    raise SystemExit(2)
