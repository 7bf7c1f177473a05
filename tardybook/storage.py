"""
Persistent storage for the tardiness state.

The whole AppState lives in one durable key-value slot. Here a slot is a
JSON file inside a data directory:

    <data_dir>/<key>.json      e.g. ~/.tardybook/tardinessApp.json

File layout (one object per class):

    {
      "MIPA 1": {
        "students": ["Ana", "Budi"],
        "records": {"2025-05-03": {"Ana": 10}}
      }
    }

Loading never crashes the application: a missing or corrupted file
means "no stored state" and the caller falls back to the default.
Saving is best effort: failures are logged and reported as False.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Optional

from tardybook.config import DEFAULT_STORAGE_KEY
from tardybook.model import AppState, ClassData, TardinessRecord, app_state_to_dict
from tardybook.store import initial_app_state, parse_roster_text

log = logging.getLogger(__name__)


def _normalize_minutes(value: Any) -> Optional[int]:
    # bool is an int subclass; true/false in JSON are not minutes
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, float) and value.is_integer() and value >= 1:
        return int(value)
    return None


def normalize_class_data(raw: Any) -> ClassData:
    """
    Build a ClassData from untrusted JSON.

    - students: strings only, trimmed, blanks and duplicates dropped
    - records: date -> {name: minutes >= 1}; empty dates dropped
    """
    if not isinstance(raw, dict):
        return ClassData.empty()

    students_raw = raw.get("students", [])
    students = parse_roster_text(x for x in students_raw if isinstance(x, str)) if isinstance(students_raw, list) else []

    records: dict[str, TardinessRecord] = {}
    records_raw = raw.get("records", {})
    if isinstance(records_raw, dict):
        for day, daily in records_raw.items():
            if not isinstance(daily, dict):
                continue
            clean: TardinessRecord = {}
            for name, minutes in daily.items():
                m = _normalize_minutes(minutes)
                if isinstance(name, str) and name.strip() and m is not None:
                    clean[name.strip()] = m
            if clean:
                records[str(day)] = clean

    return ClassData(students=students, records=records)


class JsonFileStorage:
    """
    Key-value slots backed by JSON files in one directory.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[AppState]:
        """
        Return the stored AppState, or None if absent or unparsable.
        """
        path = self.path_for(key)

        # First run: nothing stored yet
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.warning("Could not read %s (%s); using defaults", path, exc)
            return None

        if not isinstance(data, dict):
            log.warning("Unexpected content in %s; using defaults", path)
            return None

        return {str(name): normalize_class_data(raw) for name, raw in data.items()}

    def save(self, key: str, state: AppState) -> bool:
        """
        Write the state atomically (temp file + replace). Returns success.
        """
        path = self.path_for(key)
        tmp = path.with_name(path.name + ".tmp")
        payload = json.dumps(app_state_to_dict(state), indent=2, ensure_ascii=False)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            log.warning("Could not save state to %s: %s", path, exc)
            if tmp.exists():
                tmp.unlink()
            return False
        return True

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            log.warning("Could not delete %s: %s", path, exc)
            return False
        return True


def load_app_state(
    storage: JsonFileStorage, class_names: Iterable[str], key: str = DEFAULT_STORAGE_KEY
) -> AppState:
    """
    Rehydrate the AppState, falling back to empty classes.

    Predefined classes missing from the stored state are added empty;
    stored classes that are no longer predefined are kept.
    """
    names = list(class_names)
    stored = storage.load(key)
    if stored is None:
        return initial_app_state(names)

    state = initial_app_state(names)
    state.update(stored)
    return state
