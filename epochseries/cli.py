"""
Command line interface for epochseries.

    epochseries list "2017-01-14T00:00:00 UTC" "2017-01-14T12:00:00 UTC" 2h
    epochseries count "2017-01-14T00:00:00 UTC" "2017-01-14T12:00:00 UTC" 2h --inclusive
"""
import argparse
import logging
import sys
from typing import List, Optional

from epochseries import VERSION_TEXT
from epochseries.config import get_config
from epochseries.errors import EpochSeriesError
from epochseries.primitives import parse_duration, parse_epoch
from epochseries.series.length import approximate_len
from epochseries.series.time_series import TimeSeries
from epochseries.utils.logger import setup_logging

logger = logging.getLogger(__name__)

EXIT_USAGE = 2


def _build_series(args: argparse.Namespace) -> TimeSeries:
    """Create the series described by positional start/end/step arguments."""
    start = parse_epoch(args.start)
    end = parse_epoch(args.end)
    step = parse_duration(args.step or get_config().cli_default_step)

    if args.inclusive:
        return TimeSeries.inclusive(start, end, step)
    return TimeSeries.exclusive(start, end, step)


def cmd_list(args: argparse.Namespace) -> int:
    """Print every epoch of the series, one per line."""
    series = _build_series(args)
    limit = args.limit

    if limit is None:
        total = series.total_len()
        max_print = get_config().cli_max_print
        if total > max_print:
            print(
                f"Error: series has {total} epochs (more than {max_print}); pass --limit to print a prefix",
                file=sys.stderr,
            )
            return EXIT_USAGE

    source = reversed(series) if args.reverse else series
    printed = 0
    for epoch in source:
        if limit is not None and printed >= limit:
            break
        print(epoch.isoformat())
        printed += 1

    logger.info(f"Printed {printed} epochs")
    return 0


def cmd_count(args: argparse.Namespace) -> int:
    """Print the exact number of epochs in the series."""
    series = _build_series(args)
    print(series.total_len())

    if args.approximate:
        estimate = approximate_len(series.start, series.end, series.step, series.is_inclusive)
        print(f"approximate: {estimate}")
    return 0


def _add_range_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("start", help="First epoch, e.g. '2017-01-14T00:00:00 UTC'")
    parser.add_argument("end", help="Boundary epoch")
    parser.add_argument(
        "step",
        nargs="?",
        default=None,
        help="Step duration, e.g. 2h, 15min, 0.5us (default from config)",
    )
    parser.add_argument(
        "--inclusive",
        action="store_true",
        help="Include the end epoch when it lies on a step",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epochseries",
        description="Generate evenly spaced epochs between two instants.",
    )
    parser.add_argument("--version", action="version", version=VERSION_TEXT)
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-dir", default=None, help="Also write logs to this directory")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Print the epochs of a series")
    _add_range_arguments(list_parser)
    list_parser.add_argument("--reverse", action="store_true", help="Print from the end backwards")
    list_parser.add_argument("--limit", type=int, default=None, help="Print at most N epochs")
    list_parser.set_defaults(func=cmd_list)

    count_parser = subparsers.add_parser("count", help="Print the number of epochs in a series")
    _add_range_arguments(count_parser)
    count_parser.add_argument(
        "--approximate",
        action="store_true",
        help="Also print the seconds-ratio estimate",
    )
    count_parser.set_defaults(func=cmd_count)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(run_dir=args.log_dir or config.log_dir, level=args.log_level or config.log_level)

    try:
        return args.func(args)
    except EpochSeriesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
