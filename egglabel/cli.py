"""CLI entry point for EggLabel."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, datetime, time

from dotenv import load_dotenv

from .codes import CATEGORY_GUIDE, HOUSING_GUIDE, find_candidate
from .config import load_config
from .db import HistoryDB
from .expiry import SOON_THRESHOLD_DAYS, days_remaining, expiry_state
from .export import format_date, write_csv
from .models import Record
from .reminders import plan

logger = logging.getLogger(__name__)

_STATE_MARKS = {"fresh": "●", "soon": "◐", "expired": "○"}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="egglabel",
        description="Decode egg stamp codes and keep a history with expiry reminders",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the configuration file (TOML)",
    )

    sub = parser.add_subparsers(dest="command")

    # decode
    decode_parser = sub.add_parser("decode", help="Decode a stamp code and save it")
    decode_parser.add_argument("code", help="Code from the egg or packaging, e.g. 1-RU-12345")
    _add_packing_args(decode_parser)

    # scan
    scan_parser = sub.add_parser(
        "scan", help="Pick the stamp code out of recognized text lines and decode it"
    )
    scan_parser.add_argument("texts", nargs="+", help="Text lines from an OCR tool")
    _add_packing_args(scan_parser)

    # history
    history_parser = sub.add_parser("history", help="Show decoded codes, newest first")
    history_parser.add_argument("--favorites", action="store_true", help="Only favorites")
    history_parser.add_argument(
        "--expiring",
        type=int,
        nargs="?",
        const=SOON_THRESHOLD_DAYS,
        default=None,
        metavar="DAYS",
        help=f"Only records expiring within DAYS days (default: {SOON_THRESHOLD_DAYS})",
    )
    history_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # favorite
    fav_parser = sub.add_parser("favorite", help="Toggle the favorite flag of a record")
    fav_parser.add_argument("identifier")

    # export
    export_parser = sub.add_parser("export", help="Export the history to CSV or PDF")
    export_parser.add_argument("format", choices=["csv", "pdf"])
    export_parser.add_argument("output", metavar="FILE")
    export_parser.add_argument("--favorites", action="store_true", help="Only favorites")

    # reminders
    rem_parser = sub.add_parser("reminders", help="Show planned expiry reminders")
    rem_parser.add_argument(
        "--lookahead", type=int, default=None, help="Days before expiry to remind"
    )
    rem_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # watch
    sub.add_parser("watch", help="Run the reminder scheduler until interrupted")

    # guide
    sub.add_parser("guide", help="Explain housing digits and egg categories")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    match args.command:
        case "decode":
            _cmd_decode(config, args.code, args)
        case "scan":
            _cmd_scan(config, args)
        case "history":
            _cmd_history(config, args)
        case "favorite":
            _cmd_favorite(config, args)
        case "export":
            _cmd_export(config, args)
        case "reminders":
            _cmd_reminders(config, args)
        case "watch":
            asyncio.run(_cmd_watch(config))
        case "guide":
            _cmd_guide()


def _add_packing_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--packing-date",
        type=date.fromisoformat,
        default=None,
        metavar="YYYY-MM-DD",
        help="Packing date (default: today)",
    )
    p.add_argument(
        "--no-date", action="store_true", help="Do not record a packing date"
    )
    p.add_argument("--json", action="store_true", help="Output as JSON")


def _cmd_decode(config, code: str, args) -> None:
    if not code.strip():
        print("Please enter or scan a code.", file=sys.stderr)
        sys.exit(1)

    packing_date = None if args.no_date else (args.packing_date or date.today())
    record = Record.create(code, packing_date)

    with HistoryDB(config.database.path) as db:
        store = db.load_store()
        store.append(record)
        db.save_store(store)
    logger.debug("Decoded %s as %s", code, record.identifier)

    if args.json:
        print(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Code:     {record.raw_code}")
    print(f"Category: {record.category}")
    print(f"Housing:  {record.housing}")
    print(f"Country:  {record.country}")
    print(f"Factory:  {record.factory}")
    if record.expiry_date:
        state = expiry_state(record.expiry_date, date.today())
        print(f"Expiry:   {format_date(record.expiry_date)} ({state})")
    print(f"ID:       {record.identifier}")


def _cmd_scan(config, args) -> None:
    code = find_candidate(t.strip() for t in args.texts)
    if code is None:
        print("No egg stamp code found in the recognized text.", file=sys.stderr)
        sys.exit(1)
    _cmd_decode(config, code, args)


def _cmd_history(config, args) -> None:
    with HistoryDB(config.database.path) as db:
        store = db.load_store()
    today = date.today()
    records = store.recent_first(favorites=args.favorites)
    if args.expiring is not None:
        expiring = {r.identifier for r in store.expiring(today, within_days=args.expiring)}
        records = tuple(r for r in records if r.identifier in expiring)

    if args.json:
        data = []
        for r in records:
            item = r.to_dict()
            if r.expiry_date:
                item["expiry_state"] = expiry_state(r.expiry_date, today)
            data.append(item)
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not records:
        if args.expiring is not None:
            print(f"No eggs expire within {args.expiring} days.")
        elif args.favorites:
            print("No favorites yet. Mark some egg codes as favorites!")
        else:
            print("No eggs decoded yet.")
        return

    for r in records:
        star = "★" if r.is_favorite else " "
        line = f"{star} {r.raw_code:<16} {r.housing:<20} Checked: {format_date(r.check_date)}"
        if r.expiry_date:
            state = expiry_state(r.expiry_date, today)
            days = days_remaining(r.expiry_date, today)
            line += f"  {_STATE_MARKS[state]} {state} ({days:+d}d)"
        print(line)
        print(f"  {r.identifier}")


def _cmd_favorite(config, args) -> None:
    with HistoryDB(config.database.path) as db:
        store = db.load_store()
        if not store.toggle_favorite(args.identifier):
            print(f"No record with identifier {args.identifier}", file=sys.stderr)
            sys.exit(1)
        db.save_store(store)
        record = store.get(args.identifier)
    state = "added to" if record.is_favorite else "removed from"
    print(f"{record.raw_code} {state} favorites")


def _cmd_export(config, args) -> None:
    with HistoryDB(config.database.path) as db:
        store = db.load_store()
    records = store.favorites_only() if args.favorites else store.all()

    if args.format == "csv":
        write_csv(records, args.output)
        print(f"Exported {len(records)} records to {args.output}")
        return

    from .pdf import generate_pdf

    try:
        path = generate_pdf(
            records,
            args.output,
            title=config.export.pdf_title,
            author=config.export.pdf_author,
        )
    except ImportError as e:
        print(f"PDF export error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Exported {len(records)} records to {path}")


def _cmd_reminders(config, args) -> None:
    lookahead = args.lookahead
    if lookahead is None:
        lookahead = config.reminders.lookahead_days

    with HistoryDB(config.database.path) as db:
        store = db.load_store()
    reminders = plan(
        store.all(),
        datetime.now(),
        lookahead_days=lookahead,
        at=time(config.reminders.hour, 0),
    )

    if args.json:
        data = [
            {
                "identifier": r.identifier,
                "fire_at": r.fire_at.isoformat(),
                "title": r.title,
                "message": r.message,
            }
            for r in reminders
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not reminders:
        print("No upcoming expiry reminders.")
        return
    for r in reminders:
        print(f"{r.fire_at:%Y-%m-%d %H:%M}  {r.message}")


async def _cmd_watch(config) -> None:
    from .scheduler import ReminderScheduler

    if not config.reminders.enabled:
        print(
            "Expiry reminders are disabled. Set enabled = true under [reminders].",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        scheduler = ReminderScheduler(config)
    except ImportError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    scheduler.refresh()
    scheduler.start()
    print("Watching for expiry reminders. Press Ctrl+C to stop.")
    try:
        await asyncio.Event().wait()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        scheduler.stop()


def _cmd_guide() -> None:
    print("Housing method (first digit):")
    for label, text in HOUSING_GUIDE:
        print(f"  {label:<16} {text}")
    print()
    print("Egg category:")
    for label, text in CATEGORY_GUIDE:
        print(f"  {label:<16} {text}")
