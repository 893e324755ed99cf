"""TOML configuration loader for SiSatSet."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .quickinput.categories import EVENT_CATEGORIES, SCHEDULE_DAYS

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class DatabaseConfig:
    path: str = "~/.config/sisatset/sisatset.db"


@dataclass
class HouseholdConfig:
    user_id: str = "default"
    default_child: str = ""  # child name used when --child is omitted


@dataclass
class QuickInputConfig:
    homework_deadline_days: int = 7
    event_categories: list[str] = field(
        default_factory=lambda: list(EVENT_CATEGORIES)
    )
    schedule_days: list[str] = field(default_factory=lambda: list(SCHEDULE_DAYS))


@dataclass
class SisatsetConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    household: HouseholdConfig = field(default_factory=HouseholdConfig)
    quick_input: QuickInputConfig = field(default_factory=QuickInputConfig)


def load_config(path: str | Path | None = None) -> SisatsetConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path and user id can be overridden via environment
    variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    db = raw.get("database", {})
    hh = raw.get("household", {})
    qi = raw.get("quick_input", {})

    # Resolve overrides: environment variable → config file → default
    db_path = os.environ.get("SISATSET_DB_PATH", "") or db.get(
        "path", "~/.config/sisatset/sisatset.db"
    )
    user_id = os.environ.get("SISATSET_USER_ID", "") or hh.get("user_id", "default")

    return SisatsetConfig(
        database=DatabaseConfig(path=db_path),
        household=HouseholdConfig(
            user_id=user_id,
            default_child=hh.get("default_child", ""),
        ),
        quick_input=QuickInputConfig(
            homework_deadline_days=qi.get("homework_deadline_days", 7),
            event_categories=qi.get("event_categories", list(EVENT_CATEGORIES)),
            schedule_days=[
                d.lower() for d in qi.get("schedule_days", SCHEDULE_DAYS)
            ],
        ),
    )
