from __future__ import annotations

from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from tardybook.export_csv import export_combined_csv, export_monthly_csv
from tardybook.reports import month_label
from tardybook.session import TardinessBook

console = Console()


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def run_interactive(book: TardinessBook) -> None:
    """
    Interactive menu loop over one TardinessBook.
    """
    while True:
        _print_header(book)

        choice = _prompt(
            "\n[1] Choose class\n"
            "[2] Choose date\n"
            "[3] Edit student list\n"
            "[4] Mark student late\n"
            "[5] Remove late entry\n"
            "[6] Daily report\n"
            "[7] Monthly report (this class)\n"
            "[8] Combined report (all classes)\n"
            "[9] Export .csv\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "1":
            _flow_choose_class(book)
        elif choice == "2":
            _flow_choose_date(book)
        elif choice == "3":
            _flow_edit_roster(book)
        elif choice == "4":
            _flow_mark_late(book)
        elif choice == "5":
            _flow_clear_late(book)
        elif choice == "6":
            _flow_daily(book)
        elif choice == "7":
            _flow_monthly(book)
        elif choice == "8":
            _flow_combined(book)
        elif choice == "9":
            _flow_export(book)
        else:
            _println("Invalid choice.")


def _print_header(book: TardinessBook) -> None:
    students = book.class_data().students
    late_today = book.daily_record()
    _println("\n=== TardyBook (interactive) ===")
    _println(
        f"Class: [bold cyan]{book.selected_class}[/] | Date: {book.selected_date} "
        f"| Students: {len(students)} | Late today: [red]{len(late_today)}[/]"
    )


def _pick_number(msg: str, n: int) -> int | None:
    """
    Ask for a 1-based index; None on blank, invalid or out-of-range input.
    """
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdigit():
        _println("Not a number.")
        return None
    i = int(pick)
    if not (1 <= i <= n):
        _println("Out of range.")
        return None
    return i


def _flow_choose_class(book: TardinessBook) -> None:
    names = book.class_names
    table = Table(title="Classes", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Class")
    table.add_column("Students", justify="right")
    for i, name in enumerate(names, start=1):
        table.add_row(str(i), name, str(len(book.class_data(name).students)))
    console.print(table)

    i = _pick_number("Enter number [blank = back]: ", len(names))
    if i is None:
        return
    book.select_class(names[i - 1])
    _println(f"Selected class: {book.selected_class}")


def _flow_choose_date(book: TardinessBook) -> None:
    raw = _prompt(f"Date YYYY-MM-DD [blank = keep {book.selected_date}]: ").strip()
    if not raw:
        return
    try:
        book.select_date(raw)
    except ValueError:
        _println("Invalid date (expected YYYY-MM-DD).")
        return
    _println(f"Selected date: {book.selected_date}")


def _flow_edit_roster(book: TardinessBook) -> None:
    """
    Read one name per line until a blank line, then replace the roster.
    Late entries of students no longer listed are deleted.
    """
    current = book.class_data().students
    if current:
        _println("Current list:")
        for name in current:
            _println(f"- {name}")

    _println("Enter one student name per line; empty line to finish.")
    _println("[yellow]Students missing from the new list lose their late entries.[/]")
    lines: list[str] = []
    while True:
        line = _prompt("> ")
        if not line.strip():
            break
        lines.append(line)

    if not lines:
        _println("No names entered, list unchanged.")
        return

    confirm = _prompt(f"Replace list with {len(lines)} lines? [y/N]: ").strip().lower()
    if confirm != "y":
        _println("Cancelled.")
        return

    new = book.replace_roster(lines)
    _println(f"[green]Student list saved ({len(new.students)} students).[/]")


def _flow_mark_late(book: TardinessBook) -> None:
    students = sorted(book.class_data().students)
    if not students:
        _println("No students in this class yet. Use [3] to add them.")
        return

    late = book.daily_record()
    table = Table(title=f"Mark late ({book.selected_date})", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Student")
    table.add_column("Late", justify="right")
    for i, name in enumerate(students, start=1):
        minutes = late.get(name)
        table.add_row(str(i), name, f"[red]{minutes} min[/]" if minutes else "")
    console.print(table)

    i = _pick_number("Enter number [blank = back]: ", len(students))
    if i is None:
        return
    student = students[i - 1]

    default = late.get(student, 1)
    raw = _prompt(f"Minutes late [{default}]: ").strip()
    new = book.mark_late(student, raw or default)
    _println(f"Marked late: {student} {new.records[book.selected_date][student]} min")


def _flow_clear_late(book: TardinessBook) -> None:
    late = sorted(book.daily_record().items())
    if not late:
        _println("No late entries on this day.")
        return

    for i, (name, minutes) in enumerate(late, start=1):
        _println(f"{i}) {name} | {minutes} min")

    i = _pick_number("Enter number to remove [blank = back]: ", len(late))
    if i is None:
        return
    student = late[i - 1][0]
    book.clear_late(student)
    _println(f"Removed: {student}")


def _flow_daily(book: TardinessBook) -> None:
    rows = book.daily_report()
    if not rows:
        _println("No students late on this day.")
        return

    table = Table(title=f"Daily report {book.selected_class} ({book.selected_date})", box=box.SIMPLE)
    table.add_column("Student")
    table.add_column("Minutes", justify="right")
    for r in rows:
        table.add_row(r.student_name, f"[red]{r.minutes}[/]")
    console.print(table)


def _flow_monthly(book: TardinessBook) -> None:
    rows = book.monthly_report()
    if not rows:
        _println("No late entries this month.")
        return

    table = Table(
        title=f"Monthly report {book.selected_class} - {month_label(book.selected_month)}",
        box=box.SIMPLE,
    )
    table.add_column("Student")
    table.add_column("Total minutes", justify="right")
    table.add_column("Days", justify="right")
    for r in rows:
        table.add_row(r.student_name, f"[red]{r.total_minutes}[/]", str(r.late_count))
    console.print(table)


def _flow_combined(book: TardinessBook) -> None:
    rows = book.combined_report()
    if not rows:
        _println("No late entries this month for any class.")
        return

    table = Table(title=f"Combined report - {month_label(book.selected_month)}", box=box.SIMPLE)
    table.add_column("No.", justify="right")
    table.add_column("Student")
    table.add_column("Class")
    table.add_column("Total minutes", justify="right")
    table.add_column("Days", justify="right")
    for i, r in enumerate(rows, start=1):
        table.add_row(str(i), r.student_name, r.class_name, f"[bold red]{r.total_minutes}[/]", str(r.late_count))
    console.print(table)


def _flow_export(book: TardinessBook) -> None:
    which = _prompt("Export [1] this class or [2] all classes? ").strip()
    if which not in ("1", "2"):
        _println("Invalid choice.")
        return

    default_name = f"tardiness_{book.selected_month}.csv"
    out = _prompt(f"Output path [{default_name}]: ").strip() or default_name
    out_path = Path(out).expanduser()

    try:
        if which == "1":
            n = export_monthly_csv(book.monthly_report(), out_path)
        else:
            n = export_combined_csv(book.combined_report(), out_path)
    except OSError as exc:
        _println(f"Export failed: {exc}")
        return

    _println(f"Exported {n} rows to: {out_path}")
