"""Egg stamp code decoding with a personal, expiry-aware history."""

from .codes import Classification, find_candidate, is_candidate, parse
from .config import (
    DatabaseConfig,
    EggLabelConfig,
    ExportConfig,
    LoggingConfig,
    ReminderConfig,
    load_config,
)
from .expiry import EXPIRED, FRESH, SOON, compute_expiry, expiry_state
from .export import CSV_HEADER, PrintableBlock, to_printable_blocks, to_rows, write_csv
from .models import Record
from .reminders import Reminder, plan
from .store import RecordStore

__all__ = [
    "parse",
    "Classification",
    "is_candidate",
    "find_candidate",
    "compute_expiry",
    "expiry_state",
    "FRESH",
    "SOON",
    "EXPIRED",
    "Record",
    "RecordStore",
    "CSV_HEADER",
    "PrintableBlock",
    "to_rows",
    "to_printable_blocks",
    "write_csv",
    "Reminder",
    "plan",
    "EggLabelConfig",
    "DatabaseConfig",
    "ReminderConfig",
    "ExportConfig",
    "LoggingConfig",
    "load_config",
]
