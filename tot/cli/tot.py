"""
tot - keep track of things over time

Series are CSV files in a directory, one per thing being tracked, each with a fixed
set of columns after the time:

    tot add ate what howMany        # define a series
    tot ate bananas 3               # record an entry now
    tot ate bananas 2 -t -45m       # ... or 45 minutes ago
    tot ate apple 1 -t "8pm"        # ... or at the most recent 8pm
    tot list ate --after 2020-10-04
    tot latest
"""

import logging
import sys
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import Optional, Sequence

from tot.cli.common import add_common_args, attach_option_values, print_error
from tot.errors import TotError
from tot.query import filter_after, latest_entries, read_series_data, unique_days
from tot.storage import DataAccessor, FileDataAccessor
from tot.timeparse import resolve_bound, resolve_time
from tot.util import format_timestamp

logger = logging.getLogger(__name__)

COMMANDS = ("add", "list", "latest")


def main(
    argv: Optional[Sequence[str]] = None, accessor: Optional[DataAccessor] = None
) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.v else logging.WARNING)

    try:
        if accessor is None:
            accessor = FileDataAccessor(args.path)
        args.func(args, accessor)
    except TotError as e:
        if not args.v:
            print_error(e)
            return 1
        else:
            raise
    return 0


def parse_args(argv: Sequence[str]) -> Namespace:
    argv = attach_option_values(argv)

    # Anything that isn't a command is the name of a series to append to
    positionals = [a for a in argv if not a.startswith("-")]
    if positionals and positionals[0] not in COMMANDS:
        return append_parser().parse_intermixed_args(argv)
    return command_parser().parse_args(argv)


def append_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="tot",
        description="Record an entry in a series",
    )
    add_common_args(parser)
    parser.add_argument(
        "-t",
        "--time",
        help=(
            "The time of the entry, either as a date (-t \"2020-08-12 3pm\") or as a "
            "time relative to now (-t -45m), default: now"
        ),
    )
    parser.add_argument("series", help="Series to record the entry in")
    parser.add_argument("values", nargs="*", help="A value for each of its columns")
    parser.set_defaults(func=append)
    return parser


def command_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="tot",
        description=__doc__,
        formatter_class=RawDescriptionHelpFormatter,
    )
    add_common_args(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_cmd = subparsers.add_parser("add", help="Define a new series")
    add_cmd.add_argument("name")
    add_cmd.add_argument("columns", nargs="*")
    add_cmd.set_defaults(func=add)

    list_cmd = subparsers.add_parser(
        "list", help="List the defined series, or the entries in one"
    )
    list_cmd.add_argument("series", nargs="?")
    list_cmd.add_argument(
        "-a",
        "--after",
        help=(
            "Only list entries from this time on, either as a date (-a 2020-08-12) "
            "or as a time relative to now (-a -1d). A date on its own lists just "
            "that day."
        ),
    )
    list_cmd.add_argument(
        "--days",
        action="store_true",
        help="List only the unique days on which entries occurred",
    )
    list_cmd.set_defaults(func=list_)

    latest_cmd = subparsers.add_parser(
        "latest", help="Show the latest entry in each series"
    )
    latest_cmd.set_defaults(func=latest)
    return parser


def append(args: Namespace, accessor: DataAccessor) -> None:
    timestamp = None
    if args.time:
        timestamp = resolve_time(args.time, accessor.clock.now())

    timestamp = accessor.append_values(args.series, timestamp, args.values)
    print(" ".join([f"{format_timestamp(timestamp)}:", args.series, *args.values]))


def add(args: Namespace, accessor: DataAccessor) -> None:
    accessor.create_series(args.name, args.columns)


def list_(args: Namespace, accessor: DataAccessor) -> None:
    if not args.series:
        for name in sorted(accessor.list_series()):
            print(name)
        return

    entries = read_series_data(accessor, args.series)
    if args.after:
        bound = resolve_bound(args.after, accessor.clock.now())
        logger.debug(f"Listing {args.series} after {bound}")
        entries = filter_after(entries, bound)

    if args.days:
        for day in unique_days(entries):
            print(format_timestamp(day))
    else:
        for entry in entries:
            print(entry.line)


def latest(args: Namespace, accessor: DataAccessor) -> None:
    for name, entry in latest_entries(accessor):
        print(f"{name}:")
        print(f"    {entry.line}")


if __name__ == "__main__":
    sys.exit(main())
