"""
Personal event log, kept in a CSV file.

Examples:
    daylog days add --description "Team sync" --category work
    daylog days list --after-date 2024-01-01 --categories work,home
    daylog days delete --category work --dry-run
"""

import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError, Namespace
from datetime import date
from typing import NoReturn, Optional, Sequence

from colorama import Fore, Style

from daylog.cli.common import add_common_args
from daylog.errors import ArgumentError, DaylogError
from daylog.events.event import Event
from daylog.events.query import (
    Criteria,
    DeleteCriteria,
    filter_events,
    remove_positions,
    select_for_deletion,
)
from daylog.events.store import EventStore
from daylog.events.util import parse_date, split_categories
from daylog.version import VERSION

logger = logging.getLogger(__name__)


class DaysArgumentParser(ArgumentParser):
    """
    ArgumentParser which raises an ArgumentError instead of printing usage and exiting.
    The message names the (sub)command it came from, like "daylog days list".
    """

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(f"{self.prog}: {message} (see '{self.prog} --help')")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        args = parse_args(argv)
    except ArgumentError as e:
        print_error(e)
        return 1

    logging.basicConfig(level=logging.DEBUG if args.v else logging.WARNING)
    store = EventStore(args.file)

    try:
        run_command(args, store)
    except DaylogError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(e)
        return 1
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        return 1

    return 0


def run_command(args: Namespace, store: EventStore) -> None:
    if args.command == "list":
        list_events(args, store)
    elif args.command == "add":
        add_event(args, store)
    elif args.command == "delete":
        delete_events(args, store)
    else:
        raise ArgumentError(f"Invalid command: {args.command}")


def list_events(args: Namespace, store: EventStore) -> None:
    criteria = Criteria(
        specific_date=args.date,
        before_date=args.before_date,
        after_date=args.after_date,
        categories=set(args.categories) if args.categories is not None else None,
        exclude=args.exclude,
    )
    events = store.load()
    for event in filter_events(events, criteria):
        print(event)


def add_event(args: Namespace, store: EventStore) -> None:
    if not args.description.strip():
        raise ArgumentError("Description is required")

    event = Event(
        date=args.date if args.date is not None else date.today(),
        description=args.description,
        category=args.category,
    )
    store.append_one(event)
    print("Event added successfully")


def delete_events(args: Namespace, store: EventStore) -> None:
    criteria = DeleteCriteria(
        date=args.date,
        description=args.description,
        category=args.category,
        all=args.all,
    )
    events = store.load()
    positions = select_for_deletion(events, criteria)

    if args.dry_run:
        print("Events to be deleted:")
        for i in positions:
            print(events[i])
        return

    if not positions:
        print("No matching events, nothing deleted")
        return

    store.rewrite_all(remove_positions(events, positions))
    print(f"Deleted {len(positions)} event(s)")


def print_error(error: object) -> None:
    print(f"{Fore.RED}{error}{Style.RESET_ALL}", file=sys.stderr)


def date_arg(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def parse_args(argv: Optional[Sequence[str]] = None) -> Namespace:
    parser = DaysArgumentParser(prog="daylog", description=__doc__)
    add_common_args(parser)
    parser.add_argument("--version", action="version", version=VERSION)

    # Everything lives under a leading "days"
    prefix = parser.add_subparsers(dest="prefix", metavar="days", required=True)
    days = prefix.add_parser("days", help="Manage the event log")
    commands = days.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List events")
    list_parser.add_argument(
        "--today",
        dest="date",
        action="store_const",
        const=date.today(),
        help="Only events from today",
    )
    list_parser.add_argument(
        "--date", type=date_arg, metavar="DATE", help="Only events on DATE"
    )
    list_parser.add_argument(
        "--before-date", type=date_arg, metavar="DATE", help="Only events before DATE"
    )
    list_parser.add_argument(
        "--after-date", type=date_arg, metavar="DATE", help="Only events after DATE"
    )
    list_parser.add_argument(
        "--categories",
        type=split_categories,
        action="extend",
        metavar="C1,C2,...",
        help="Only events in one of these categories",
    )
    list_parser.add_argument(
        "--exclude",
        action="store_true",
        help="Invert --categories, only events in none of the categories",
    )

    add_parser = commands.add_parser("add", help="Add an event")
    add_parser.add_argument(
        "--date",
        type=date_arg,
        metavar="DATE",
        help="Date of the event, default: today",
    )
    add_parser.add_argument("--category", default="", metavar="NAME")
    add_parser.add_argument("--description", required=True, metavar="TEXT")

    delete_parser = commands.add_parser(
        "delete", help="Delete events matching any of the given options"
    )
    delete_parser.add_argument("--date", type=date_arg, metavar="DATE")
    delete_parser.add_argument(
        "--description",
        metavar="SUBSTR",
        help="Events whose description contains SUBSTR",
    )
    delete_parser.add_argument("--category", metavar="NAME")
    delete_parser.add_argument(
        "--all", action="store_true", help="Delete every event, ignoring other options"
    )
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print what would be deleted",
    )

    return parser.parse_args(argv)


if __name__ == "__main__":
    sys.exit(main())
