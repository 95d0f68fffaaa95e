import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Sequence

from colorama import Fore, Style

from tot.constants import DEFAULT_PATH
from tot.version import VERSION

# Options which take a value. Their values may start with "-", e.g. "-t -8h"
VALUE_OPTIONS = ("-t", "--time", "-a", "--after", "--path")


def add_common_args(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        help="Verbose mode",
        action="store_true",
    )
    parser.add_argument(
        "--path",
        help=f"Directory containing the series, default: {DEFAULT_PATH}",
        type=Path,
        default=DEFAULT_PATH,
    )
    parser.add_argument("--version", action="version", version=VERSION)


def attach_option_values(argv: Sequence[str]) -> list[str]:
    """
    Rewrite "--time -8h" as "--time=-8h". argparse would otherwise take "-8h" for an
    option and complain that --time is missing its value.
    """
    out: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            out.append(arg)
            out.extend(args)
            break

        if arg in VALUE_OPTIONS:
            value = next(args, None)
            if value is not None:
                arg = f"{arg}={value}"
        out.append(arg)
    return out


def print_error(e: Exception) -> None:
    msg = str(e)
    if sys.stderr.isatty():
        msg = Fore.RED + msg + Style.RESET_ALL
    print(msg, file=sys.stderr)
