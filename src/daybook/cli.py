from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .api import api_state
from .config import get_settings
from .core import WEEKDAY_LABELS, parse_date_key
from .domain import CalendarError, ConflictError, Event
from .logging import configure_logging
from .services import MonthOverview

logger = logging.getLogger(__name__)


def render_month(overview: MonthOverview) -> str:
    """Plain-text month grid; ``*`` marks today and ``(n)`` the event count."""

    title = date(overview.year, overview.month, 1).strftime("%B %Y")
    lines = [title.center(7 * 8).rstrip(), "".join(label.ljust(8) for label in WEEKDAY_LABELS).rstrip()]
    for week in overview.weeks:
        cells = []
        for day in week:
            if day is None:
                cells.append("".ljust(8))
                continue
            marker = "*" if day == overview.today else ""
            count = overview.counts.get(day)
            label = f"{day}{marker}" + (f"({count})" if count else "")
            cells.append(label.ljust(8))
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def _format_event(event: Event) -> str:
    text = f"[{event.id}] {event.start_time}-{event.end_time} {event.name}"
    if event.description:
        text += f" - {event.description}"
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daybook command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    month_parser = subparsers.add_parser("month", help="Print a month grid with event counts.")
    month_parser.add_argument("--year", type=int)
    month_parser.add_argument("--month", type=int)

    list_parser = subparsers.add_parser("list", help="List the events of a day.")
    list_parser.add_argument("day", help="Date key, YYYY-MM-DD.")

    add_parser = subparsers.add_parser("add", help="Add an event to a day.")
    add_parser.add_argument("day")
    add_parser.add_argument("name")
    add_parser.add_argument("start", help="Start time, HH:MM.")
    add_parser.add_argument("end", help="End time, HH:MM.")
    add_parser.add_argument("--description", default="")
    add_parser.add_argument("--color")

    update_parser = subparsers.add_parser("update", help="Change an existing event.")
    update_parser.add_argument("day")
    update_parser.add_argument("event_id", type=int)
    update_parser.add_argument("--name")
    update_parser.add_argument("--start")
    update_parser.add_argument("--end")
    update_parser.add_argument("--description")
    update_parser.add_argument("--color")

    delete_parser = subparsers.add_parser("delete", help="Delete an event.")
    delete_parser.add_argument("day")
    delete_parser.add_argument("event_id", type=int)

    search_parser = subparsers.add_parser("search", help="Search names and descriptions.")
    search_parser.add_argument("term", nargs="?", default="")

    export_parser = subparsers.add_parser("export", help="Write calendar-events-YYYY-MM-DD.json.")
    export_parser.add_argument("--day", help="Date context for the file name and month; defaults to today.")
    export_parser.add_argument("--month", action="store_true", help="Only export the context month.")
    export_parser.add_argument("--output", type=Path, help="Target directory.")

    import_parser = subparsers.add_parser("import", help="Replace all events with a snapshot file.")
    import_parser.add_argument("path", type=Path)

    api_parser = subparsers.add_parser("api", help="Start the local HTTP API.")
    api_parser.add_argument("--host")
    api_parser.add_argument("--port", type=int)

    return parser


def _run(args: argparse.Namespace) -> None:
    calendar = api_state.calendar

    if args.command == "month":
        today = date.today()
        print(render_month(calendar.month_overview(args.year or today.year, args.month or today.month)))
    elif args.command == "list":
        events = calendar.list_day(args.day)
        if not events:
            print(f"No events on {args.day}.")
        for event in events:
            print(_format_event(event))
    elif args.command == "add":
        event = calendar.add(
            args.day,
            name=args.name,
            start_time=args.start,
            end_time=args.end,
            description=args.description,
            color=args.color,
        )
        print(f"Added {_format_event(event)}")
    elif args.command == "update":
        event = calendar.update(
            args.day,
            args.event_id,
            name=args.name,
            start_time=args.start,
            end_time=args.end,
            description=args.description,
            color=args.color,
        )
        print(f"Updated {_format_event(event)}")
    elif args.command == "delete":
        calendar.delete(args.day, args.event_id)
        print(f"Deleted event {args.event_id} from {args.day}.")
    elif args.command == "search":
        hits = calendar.search(args.term)
        if not hits:
            print("No matching events.")
        for key, event in hits:
            print(f"{key} {_format_event(event)}")
    elif args.command == "export":
        context = parse_date_key(args.day) if args.day else None
        path = calendar.export(context=context, month_only=args.month, directory=args.output)
        print(f"Exported to {path}")
    elif args.command == "import":
        count = calendar.import_file(args.path)
        print(f"Imported {count} event(s) from {args.path}.")
    elif args.command == "api":
        from .services.http import run_local_server

        server = get_settings().server
        run_local_server(host=args.host or server.host, port=args.port or server.port)
    else:  # pragma: no cover - argparse enforces choices
        raise ValueError(f"Unknown command {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    logger.debug("Daybook CLI running %s", args.command)

    try:
        _run(args)
    except ConflictError as exc:
        print(f"Conflict: {exc}", file=sys.stderr)
        return 2
    except CalendarError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
