#!/usr/bin/env python3
"""
Flight Stats CLI

Computes flight statistics from an observation log.

Usage:
    python stats_cli.py --input flight.log --temp-min --temp-max --temp-mean
    python stats_cli.py --input flight.log --observations --distance
"""

import argparse
import logging
import sys
from typing import List, Optional

from config import LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL
from collector.observation_parser import parse_file
from core.flight_stats import calculate_flight_stats
from core.models import FlightStats
from core.units import normalize_records

logger = logging.getLogger("stats_cli")


def run_pipeline(path: str) -> FlightStats:
    """parse -> normalize -> aggregate"""
    records = parse_file(path)
    return calculate_flight_stats(normalize_records(records))


def format_stats(stats: FlightStats, args: argparse.Namespace) -> List[str]:
    """Render the statistics selected on the command line, one item per line."""
    lines = []

    if args.temp_min:
        lines.append(f"Min temperature: {stats.min_temp}")

    if args.temp_max:
        lines.append(f"Max temperature: {stats.max_temp}")

    if args.temp_mean:
        lines.append(f"Mean temperature: {stats.mean_temp}")

    if args.observations:
        lines.append("Number of observations:")
        for name, count in stats.observations.items():
            lines.append(f"    {name} - {count}")

    if args.distance:
        lines.append(f"Total distance: {stats.distance} meters")

    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flight Stats CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Temperature summary (Kelvin)
  python stats_cli.py --input flight.log --temp-min --temp-max --temp-mean

  # Observations per observatory and total distance (meters)
  python stats_cli.py --input flight.log --observations --distance
        """
    )
    parser.add_argument("--input", required=True, help="input file.")
    parser.add_argument("--temp-min", action="store_true", help="calculate minimum temperature.")
    parser.add_argument("--temp-max", action="store_true", help="calculate maximum temperature.")
    parser.add_argument("--temp-mean", action="store_true", help="calculate mean temperature.")
    parser.add_argument(
        "--observations",
        action="store_true",
        help="calculate number of observations from each observatory."
    )
    parser.add_argument("--distance", action="store_true", help="calculate total distance travelled.")
    parser.add_argument("--verbose", action="store_true", help="log every skipped line.")
    parser.add_argument("--debug", action="store_true", help="re-raise errors with a traceback.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    try:
        stats = run_pipeline(args.input)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Command failed: {e}")
        if args.debug:
            raise
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1

    for line in format_stats(stats, args):
        print(line)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
