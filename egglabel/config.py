"""TOML configuration loader for EggLabel."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

from .db.history import DEFAULT_DB_PATH


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class ReminderConfig:
    enabled: bool = False
    lookahead_days: int = 1
    hour: int = 9
    refresh_schedule: str = "0 0 * * *"


@dataclass
class ExportConfig:
    pdf_title: str = "Egg Label History"
    pdf_author: str = "User"


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class EggLabelConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> EggLabelConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path and log level can be overridden via environment
    variables when the file leaves them unset.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    dbs = raw.get("database", {})
    rem = raw.get("reminders", {})
    exp = raw.get("export", {})
    log = raw.get("logging", {})

    # Resolve settings: config file → environment variable → default
    db_path = dbs.get("path", "") or os.environ.get(
        "EGGLABEL_DB_PATH", DEFAULT_DB_PATH
    )
    log_level = log.get("level", "") or os.environ.get(
        "EGGLABEL_LOG_LEVEL", "INFO"
    )

    lookahead_days = rem.get("lookahead_days", 1)
    if lookahead_days < 0:
        raise ValueError(f"reminders.lookahead_days must be >= 0: {lookahead_days}")
    hour = rem.get("hour", 9)
    if not 0 <= hour <= 23:
        raise ValueError(f"reminders.hour must be between 0 and 23: {hour}")

    return EggLabelConfig(
        database=DatabaseConfig(path=db_path),
        reminders=ReminderConfig(
            enabled=rem.get("enabled", False),
            lookahead_days=lookahead_days,
            hour=hour,
            refresh_schedule=rem.get("refresh_schedule", "0 0 * * *"),
        ),
        export=ExportConfig(
            pdf_title=exp.get("pdf_title", "Egg Label History"),
            pdf_author=exp.get("pdf_author", "User"),
        ),
        logging=LoggingConfig(level=log_level.upper()),
    )
