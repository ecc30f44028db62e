from argparse import ArgumentParser
from pathlib import Path

from daylog.constants import DEFAULT_EVENTS_FILE


def add_common_args(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        help="Verbose mode",
        action="store_true",
    )
    parser.add_argument(
        "-f",
        "--file",
        help=f"Events file to read/write, default: {DEFAULT_EVENTS_FILE}",
        type=Path,
        default=DEFAULT_EVENTS_FILE,
    )
