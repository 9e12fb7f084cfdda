#!/usr/bin/env python3
"""Tether - Personal relationship manager.

Single entry point for the command line.

Usage:
    python tether.py --status                          # Status of every contact
    python tether.py --attention                       # Who needs outreach now
    python tether.py --bulk-snooze 2026-03-01 2026-03-07 --snooze-days 14
    python tether.py --data contacts.json --status     # Use another data file
    python tether.py --version                         # Show version
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from src import __version__
from src.core.config import Config, get_config, validate_config
from src.core.exceptions import TetherError
from src.core.logging import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tether - Personal relationship manager")
    parser.add_argument("--status", action="store_true", help="Show status of every contact")
    parser.add_argument(
        "--attention",
        action="store_true",
        help="Show contacts that are due or overdue, with dashboard counts",
    )
    parser.add_argument(
        "--bulk-snooze",
        nargs=2,
        metavar=("START", "END"),
        help="Snooze contacts due between START and END (YYYY-MM-DD) and save the data file",
    )
    parser.add_argument(
        "--snooze-days",
        type=int,
        help="Snooze length for --bulk-snooze (default: TETHER_DEFAULT_SNOOZE_DAYS)",
    )
    parser.add_argument("--data", type=Path, help="Contact data file (overrides config)")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for Tether.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"Tether v{__version__}")
        return 0

    try:
        config = get_config()
    except TetherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    debug = args.debug or config.debug
    setup_logging(
        log_dir=config.log_path,
        console_level=logging.DEBUG if debug else logging.WARNING,
    )
    logger = get_logger("main")
    logger.info(f"Tether v{__version__} starting...")

    if args.data is not None:
        config.data_path = args.data

    for issue in validate_config(config):
        if issue.startswith("CRITICAL:"):
            logger.error(f"Configuration: {issue}")
        else:
            logger.warning(f"Configuration issue: {issue}")

    try:
        return _run(args, config)
    except TetherError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _run(args: argparse.Namespace, config: Config) -> int:
    from src.db.intake import load_contacts, parse_date, save_contacts
    from src.engine.attention import (
        build_needs_attention,
        bulk_snooze,
        get_contact_status,
        summarize,
    )
    from src.engine.cadence import get_annual_frequency_text, get_status_text

    contacts = load_contacts(config.data_path)
    now = datetime.now()

    if args.bulk_snooze:
        start, end = args.bulk_snooze
        snooze_days = (
            args.snooze_days if args.snooze_days is not None else config.default_snooze_days
        )
        count = bulk_snooze(contacts, parse_date(start), parse_date(end), snooze_days, now)
        if count == 0:
            print("No contacts with due dates in this range")
            return 0
        save_contacts(contacts, config.data_path)
        print(f"Snoozed {count} contacts for {snooze_days} days")
        return 0

    if args.attention:
        stats = summarize(contacts, now)
        print(
            f"{stats.total_contacts} contacts, "
            f"{stats.overdue_contacts} overdue, {stats.due_contacts} due"
        )
        for item in build_needs_attention(contacts, now):
            print(f"  {item.contact.name:30s} {get_status_text(item.status)}")
        return 0

    # --status is the default view
    for contact in contacts:
        status = get_contact_status(contact, now)
        frequency = get_annual_frequency_text(contact.cadence_days)
        line = f"{contact.name:30s} {get_status_text(status)}"
        if frequency:
            line += f" ({frequency})"
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
