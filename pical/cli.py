"""Command-line interface for inspecting how pical reads a calendar file."""

import argparse
import sys
from datetime import datetime, timezone
from typing import Optional

from .config import Settings, find_default_config, load_config, local_offset, parse_offset
from .exceptions import ConfigError, ICalSyntaxError
from .log import configure_logging
from .models import Calendar, Event, filter_by_date_range
from .parser import ICalParser, default_horizon


def format_event(event: Event) -> str:
    return (
        f"{event.start:%Y-%m-%d %H:%M} → {event.end:%Y-%m-%d %H:%M}  {event.summary}"
    )


def format_offset(offset: timezone) -> str:
    minutes = int(offset.utcoffset(None).total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    h, m = divmod(abs(minutes), 60)
    return f"{sign}{h:02d}:{m:02d}"


def print_calendar(calendar: Calendar, offset: timezone) -> None:
    print(f"{len(calendar)} event(s), times in UTC{format_offset(offset)}")
    for event in calendar:
        print(format_event(event))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pical",
        description="Parse iCal files and list their events, with recurrences expanded",
        epilog="""
Examples:
  %(prog)s calendar.ics                    # Events in the next 60 days
  %(prog)s -tz +10:00 calendar.ics         # Times expressed in UTC+10
  %(prog)s --days 14 calendar.ics          # Expand recurrences two weeks ahead
  %(prog)s -d 2024-01-13 calendar.ics      # Expand starting from a given date
  %(prog)s -c pical.json calendar.ics      # Use config file (pical.json auto-detected)

Config file format (pical.json):
  {
    "timezone": "+10:00",
    "horizon_days": 60,
    "zones": {"Australia/Perth": "+08:00"}
  }
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "sources",
        nargs="+",
        metavar="FILE",
        help="Local iCal (.ics) files.",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Path to JSON configuration file. "
        "If not specified, looks for 'pical.json' in the usual locations.",
    )
    parser.add_argument(
        "-tz",
        "--timezone",
        metavar="OFFSET",
        help="UTC offset events are expressed in: 'UTC', 'LOCAL', or '+10:00'. "
        "Default: local offset.",
    )
    parser.add_argument(
        "-d",
        "--date",
        metavar="YYYY-MM-DD",
        help="Date the horizon is counted from. Default: today.",
    )
    parser.add_argument(
        "--days",
        type=int,
        metavar="N",
        help="Number of days after the start date to expand recurrences to.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _load_settings(path: Optional[str]) -> Settings:
    if path is None:
        path = find_default_config()
        if path is None:
            return Settings()
    try:
        return load_config(path)
    except FileNotFoundError:
        print(f"Error: Config file not found: {path}", file=sys.stderr)
    except PermissionError:
        print(f"Error: Permission denied reading config file: {path}", file=sys.stderr)
    except ConfigError as e:
        print(f"Error: Invalid config file: {e}", file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the pical CLI application."""
    args = build_arg_parser().parse_args(argv)
    configure_logging(debug_mode=args.verbose)

    settings = _load_settings(args.config)

    offset = settings.offset or local_offset()
    if args.timezone:
        offset = parse_offset(args.timezone)
        if offset is None:
            print(f"Error: Invalid timezone '{args.timezone}'", file=sys.stderr)
            sys.exit(1)

    now = datetime.now(offset)
    if args.date:
        try:
            now = datetime.strptime(args.date, "%Y-%m-%d").replace(tzinfo=offset)
        except ValueError:
            print(
                f"Error: Invalid date format '{args.date}'. Use YYYY-MM-DD (e.g., 2025-01-15)",
                file=sys.stderr,
            )
            sys.exit(1)

    days = settings.horizon_days if args.days is None else args.days
    if days <= 0:
        print("Error: --days must be positive", file=sys.stderr)
        sys.exit(1)
    horizon = default_horizon(now, days)

    parser = ICalParser(offset, settings.zones)
    calendar: Calendar = []
    for source in args.sources:
        try:
            with open(source, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            print(f"Error: Failed to read {source}: {e}", file=sys.stderr)
            sys.exit(1)
        try:
            calendar.extend(parser.parse(content, horizon))
        except ICalSyntaxError as e:
            print(f"Error: Failed to parse {source}: {e}", file=sys.stderr)
            sys.exit(1)

    calendar.sort(key=lambda event: event.start)
    day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    print_calendar(filter_by_date_range(calendar, day_start, horizon), offset)
