"""
Configuration: predefined classes, data location, logging.

Environment variables:

    TARDYBOOK_DATA_DIR   directory holding the JSON state file
    TARDYBOOK_LOG_LEVEL  logging level name (default WARNING)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

# Predefined class identifiers (not editable from the app)
CLASS_NAMES: tuple[str, ...] = (
    "MIPA 1",
    "MIPA 2",
    "MIPA 3",
    "IPS 1",
    "IPS 2",
)

DEFAULT_STORAGE_KEY = "tardinessApp"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    storage_key: str
    class_names: tuple[str, ...]
    log_level: str


def _default_data_dir() -> Path:
    """
    Return the default data directory (~/.tardybook).

    A function instead of a constant so tests can point it elsewhere.
    """
    return Path.home() / ".tardybook"


def load_settings(data_dir: str | Path | None = None) -> Settings:
    """
    Build Settings from arguments, then environment, then defaults.
    """
    if data_dir is None:
        env_dir = os.environ.get("TARDYBOOK_DATA_DIR", "").strip()
        data_dir = Path(env_dir) if env_dir else _default_data_dir()

    level = os.environ.get("TARDYBOOK_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"

    return Settings(
        data_dir=Path(data_dir).expanduser(),
        storage_key=DEFAULT_STORAGE_KEY,
        class_names=CLASS_NAMES,
        log_level=level,
    )


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure root logging to stderr. Called by the CLI only.
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
