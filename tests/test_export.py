"""Tests for tabular and printable export."""

import csv
import io
from datetime import date, datetime

from egglabel.export import (
    CSV_HEADER,
    format_date,
    to_printable_blocks,
    to_rows,
    write_csv,
)


def test_format_date():
    assert format_date(date(2025, 1, 5)) == "Jan 5, 2025"
    assert format_date(datetime(2025, 11, 23, 14, 0)) == "Nov 23, 2025"


def test_header_order():
    assert CSV_HEADER == (
        "Code", "Category", "Housing", "Country", "Factory", "Expiry", "CheckDate",
    )


def test_to_rows(sample_records):
    rows = to_rows(sample_records)
    assert len(rows) == 3
    assert rows[0] == (
        "1-RU-12345",
        "Table Egg - Standard",
        "Free Range (Floor)",
        "Russia",
        "12345",
        "Feb 7, 2025",
        "Jan 10, 2025",
    )


def test_to_rows_missing_expiry_is_empty(sample_records):
    row = to_rows(sample_records)[1]
    assert row[0] == "0DE001"
    assert row[5] == ""
    assert row[6] == "Jan 12, 2025"


def test_to_rows_keeps_input_order(sample_records):
    codes = [row[0] for row in to_rows(reversed(sample_records))]
    assert codes == ["C0-2-FR-77", "0DE001", "1-RU-12345"]


def test_to_rows_empty():
    assert to_rows([]) == []


def test_printable_blocks(sample_records):
    blocks = to_printable_blocks(sample_records)
    assert len(blocks) == 3
    first = blocks[0]
    assert first.identifier == sample_records[0].identifier
    assert first.lines == [
        "Code: 1-RU-12345",
        "Category: Table Egg - Standard",
        "Housing: Free Range (Floor)",
        "Country: Russia",
        "Factory: 12345",
        "Expiry: Feb 7, 2025",
        "Check Date: Jan 10, 2025",
        "",
    ]
    assert first.keep_together is True
    assert first.text.endswith("Check Date: Jan 10, 2025\n")


def test_printable_block_missing_expiry(sample_records):
    block = to_printable_blocks(sample_records)[1]
    assert "Expiry: N/A" in block.lines


def test_write_csv_to_file(tmp_path, sample_records):
    output = tmp_path / "out" / "egg_history.csv"
    write_csv(sample_records, output)

    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))

    assert rows[0] == list(CSV_HEADER)
    assert len(rows) == 4
    # Dates contain commas and must survive quoting
    assert rows[1][5] == "Feb 7, 2025"
    assert rows[2][5] == ""


def test_write_csv_to_stream(sample_records):
    buf = io.StringIO()
    write_csv(sample_records[:1], buf)
    text = buf.getvalue()
    assert text.startswith("Code,Category,Housing,Country,Factory,Expiry,CheckDate\n")
    assert '"Feb 7, 2025"' in text
