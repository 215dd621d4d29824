"""Tabular and printable views of the record history."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import TextIO

from .models import Record

CSV_HEADER: tuple[str, ...] = (
    "Code",
    "Category",
    "Housing",
    "Country",
    "Factory",
    "Expiry",
    "CheckDate",
)


@dataclass
class PrintableBlock:
    """Labelled lines for one record, ending with a blank line.

    ``keep_together`` tells the renderer not to split the block across pages.
    """

    identifier: str
    lines: list[str] = field(default_factory=list)
    keep_together: bool = True

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def format_date(value: date | datetime) -> str:
    """Medium date style, e.g. ``Jan 5, 2025``."""
    return f"{value:%b} {value.day}, {value.year}"


def to_rows(records: Iterable[Record]) -> list[tuple[str, ...]]:
    """One row per record, columns in ``CSV_HEADER`` order."""
    return [
        (
            r.raw_code,
            r.category,
            r.housing,
            r.country,
            r.factory,
            format_date(r.expiry_date) if r.expiry_date else "",
            format_date(r.check_date),
        )
        for r in records
    ]


def to_printable_blocks(records: Iterable[Record]) -> list[PrintableBlock]:
    blocks: list[PrintableBlock] = []
    for r in records:
        expiry = format_date(r.expiry_date) if r.expiry_date else "N/A"
        blocks.append(
            PrintableBlock(
                identifier=r.identifier,
                lines=[
                    f"Code: {r.raw_code}",
                    f"Category: {r.category}",
                    f"Housing: {r.housing}",
                    f"Country: {r.country}",
                    f"Factory: {r.factory}",
                    f"Expiry: {expiry}",
                    f"Check Date: {format_date(r.check_date)}",
                    "",
                ],
            )
        )
    return blocks


def write_csv(records: Iterable[Record], output: str | Path | TextIO) -> None:
    """Write the header row and one row per record as CSV."""
    if isinstance(output, (str, Path)):
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="", encoding="utf-8") as f:
            write_csv(records, f)
        return

    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(to_rows(records))
