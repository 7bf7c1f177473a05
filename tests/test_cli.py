"""
Tests for CLI entry points.

Every test points --data-dir at a temporary directory so the real
user state file is never touched.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from tardybook.cli import main


def run_cli(*argv: str) -> tuple[int, str]:
    buf = io.StringIO()
    with redirect_stdout(buf):
        try:
            main(list(argv))
        except SystemExit as exc:
            code = exc.code
    return code, buf.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def cli(self, *argv: str) -> tuple[int, str]:
        return run_cli("--data-dir", self.data_dir, *argv)

    def _set_roster(self, class_name: str, names: str) -> None:
        roster = Path(self.data_dir) / "roster.txt"
        roster.write_text(names, encoding="utf-8")
        code, _ = self.cli("roster", class_name, "--file", str(roster))
        self.assertEqual(code, 0)

    def test_unknown_class_is_an_error(self) -> None:
        code, out = self.cli("roster", "Nope")
        self.assertEqual(code, 1)
        self.assertIn("Unknown class", out)

    def test_roster_mark_and_monthly(self) -> None:
        self._set_roster("MIPA 1", "Ana\n\nBudi\nAna\n")

        code, out = self.cli("roster", "MIPA 1")
        self.assertEqual(code, 0)
        self.assertIn("1. Ana", out)
        self.assertIn("2. Budi", out)

        self.assertEqual(self.cli("mark", "MIPA 1", "Ana", "--minutes", "10", "--date", "2025-05-03")[0], 0)
        self.assertEqual(self.cli("mark", "MIPA 1", "Ana", "--minutes", "5", "--date", "2025-05-10")[0], 0)

        code, out = self.cli("monthly", "MIPA 1", "--month", "2025-05")
        self.assertEqual(code, 0)
        self.assertIn("Mei 2025", out)
        self.assertIn("Ana | 15 min | 2 days", out)

        state = json.loads((Path(self.data_dir) / "tardinessApp.json").read_text(encoding="utf-8"))
        self.assertEqual(state["MIPA 1"]["records"], {"2025-05-03": {"Ana": 10}, "2025-05-10": {"Ana": 5}})

    def test_mark_requires_student_on_roster(self) -> None:
        code, out = self.cli("mark", "MIPA 1", "Ghost", "--date", "2025-05-03")
        self.assertEqual(code, 1)
        self.assertIn("Not on the roster", out)

    def test_mark_clamps_minutes(self) -> None:
        self._set_roster("MIPA 1", "Ana")
        code, out = self.cli("mark", "MIPA 1", "Ana", "--minutes", "-3", "--date", "2025-05-03")
        self.assertEqual(code, 0)
        self.assertIn("Ana 1 min", out)

    def test_invalid_date_and_month(self) -> None:
        self._set_roster("MIPA 1", "Ana")
        self.assertEqual(self.cli("mark", "MIPA 1", "Ana", "--date", "2025-13-01")[0], 1)
        self.assertEqual(self.cli("combined", "--month", "May")[0], 1)

    def test_clear_and_daily(self) -> None:
        self._set_roster("MIPA 1", "Ana\nBudi")
        self.cli("mark", "MIPA 1", "Ana", "--minutes", "3", "--date", "2025-05-03")
        self.cli("mark", "MIPA 1", "Budi", "--minutes", "8", "--date", "2025-05-03")

        code, out = self.cli("daily", "MIPA 1", "--date", "2025-05-03")
        self.assertEqual(code, 0)
        self.assertLess(out.index("Budi"), out.index("Ana"))

        code, out = self.cli("clear", "MIPA 1", "Budi", "--date", "2025-05-03")
        self.assertEqual(code, 0)
        self.assertIn("Cleared: Budi", out)

        code, out = self.cli("daily", "MIPA 1", "--date", "2025-05-03")
        self.assertNotIn("Budi", out)

    def test_combined_and_export(self) -> None:
        self._set_roster("MIPA 1", "Ana")
        self._set_roster("MIPA 2", "Ana")
        self.cli("mark", "MIPA 1", "Ana", "--minutes", "10", "--date", "2025-05-03")
        self.cli("mark", "MIPA 2", "Ana", "--minutes", "20", "--date", "2025-05-04")

        code, out = self.cli("combined", "--month", "2025-05")
        self.assertEqual(code, 0)
        self.assertIn("1. Ana | MIPA 2 | 20 min | 1 days", out)
        self.assertIn("2. Ana | MIPA 1 | 10 min | 1 days", out)

        csv_path = Path(self.data_dir) / "out" / "report.csv"
        code, out = self.cli("export", str(csv_path), "--month", "2025-05")
        self.assertEqual(code, 0)
        self.assertIn("Exported 2 rows", out)
        self.assertTrue(csv_path.exists())

    def test_export_to_unwritable_path_is_an_error(self) -> None:
        # the output path is an existing directory
        code, out = self.cli("export", self.data_dir, "--month", "2025-05")
        self.assertEqual(code, 1)
        self.assertIn("Export failed", out)

    def test_roster_replacement_purges_entries(self) -> None:
        self._set_roster("MIPA 1", "Ana\nBudi")
        self.cli("mark", "MIPA 1", "Ana", "--minutes", "10", "--date", "2025-05-03")
        self._set_roster("MIPA 1", "Budi")

        code, out = self.cli("monthly", "MIPA 1", "--month", "2025-05")
        self.assertEqual(code, 0)
        self.assertIn("No late entries this month.", out)


if __name__ == "__main__":
    unittest.main()
