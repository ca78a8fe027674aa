"""Data root, timezone, and path helpers for the habit ledger.

Only the outer surfaces (``ui/app.py``, scripts) resolve the data root from
the environment. Library code receives paths and clocks as arguments.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from habitledger.fileio import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_LABEL = "Habit Ledger Export"


def data_root() -> Path:
    """Get the data directory (holds the ledger, habits.yaml, settings.yaml)."""
    return Path(
        os.environ.get("HABIT_LEDGER_ROOT", str(Path.home() / "habit-ledger"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def ledger_path(root: Path) -> Path:
    return root / "habit-day-log.json"


def definitions_path(root: Path) -> Path:
    return root / "habits.yaml"


def settings_path(root: Path) -> Path:
    return root / "settings.yaml"


# ── Settings ──────────────────────────────────────────────────

def get_user_timezone(root: Path) -> ZoneInfo:
    """Get the configured timezone from settings.yaml, defaulting to UTC."""
    settings = read_yaml(settings_path(root))
    name = settings.get("timezone")
    if name:
        try:
            return ZoneInfo(str(name))
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r in settings.yaml, using UTC", name)
    return ZoneInfo("UTC")


def get_export_label(root: Path) -> str:
    settings = read_yaml(settings_path(root))
    return str(settings.get("export_label") or DEFAULT_EXPORT_LABEL)


def today_str(root: Path) -> str:
    """Get today's date string (YYYY-MM-DD) in the configured timezone."""
    return now_local(root).date().isoformat()


def now_local(root: Path) -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_user_timezone(root))
