#!/usr/bin/env python3
"""
Generate a synthetic flight observation log.

For each batch:
- there is one observatory
- timestamps increase minute by minute, except every Nth line which is out of order
- temperature is random, in observatory units
- coordinates are random
- there is one malformed line before the batch
- there is one empty line after the batch
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator, Optional, Tuple

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from config import (  # noqa: E402
    DELIMITER,
    FILE_ENCODING,
    GENERATOR_BATCH_SIZE,
    GENERATOR_MAX_COORD,
    GENERATOR_OBSERVATORIES,
    GENERATOR_OUT_OF_ORDER_FREQ,
    GENERATOR_OUTPUT,
    GENERATOR_TEMP_RANGE,
    LOG_DATEFMT,
    LOG_FORMAT,
    LOG_LEVEL,
    TIMESTAMP_FORMAT,
)

logger = logging.getLogger("generate_test_data")

ORIGIN = datetime(2000, 1, 1)


def _parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic flight observation log."
    )
    parser.add_argument("batches", type=int, help="Number of batches to write.")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=GENERATOR_BATCH_SIZE,
        help=f"Lines per batch (default: {GENERATOR_BATCH_SIZE}).",
    )
    parser.add_argument(
        "--output",
        default=GENERATOR_OUTPUT,
        help=f"Output file (default: {GENERATOR_OUTPUT}).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    return parser.parse_args(argv)


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def format_location(location: Tuple[int, int]) -> str:
    return f"{location[0]},{location[1]}"


def random_day(rnd: random.Random, today: Optional[datetime] = None) -> datetime:
    today = today or datetime.now()
    days = max(1, (today - ORIGIN).days)
    return ORIGIN + timedelta(days=rnd.randrange(days))


def random_observatory(rnd: random.Random) -> str:
    return rnd.choice(GENERATOR_OBSERVATORIES)


def random_temperature(rnd: random.Random) -> int:
    low, high = GENERATOR_TEMP_RANGE
    return rnd.randrange(low, high)


def random_location(rnd: random.Random, max_x: int = GENERATOR_MAX_COORD) -> Tuple[int, int]:
    return (rnd.randrange(max_x), rnd.randrange(GENERATOR_MAX_COORD))


def malformed_line(rnd: random.Random) -> str:
    """Too many fields, and in the wrong order."""
    location = format_location(random_location(rnd, max_x=GENERATOR_MAX_COORD * 2))
    parts = [
        format_timestamp(random_day(rnd)),
        random_observatory(rnd),
        location,
        location,
        location,
        str(random_temperature(rnd)),
    ]
    return DELIMITER.join(parts)


def timestamps(rnd: random.Random, batch_size: int) -> Iterator[datetime]:
    origin = random_day(rnd)
    for i in range(1, batch_size + 1):
        if i % GENERATOR_OUT_OF_ORDER_FREQ == 0:
            yield origin - timedelta(minutes=i)
        else:
            yield origin + timedelta(minutes=i)


def generate_batch(rnd: random.Random, batch_size: int) -> Iterator[str]:
    yield malformed_line(rnd)

    observatory = random_observatory(rnd)
    for ts in timestamps(rnd, batch_size):
        parts = [
            format_timestamp(ts),
            format_location(random_location(rnd)),
            str(random_temperature(rnd)),
            observatory,
        ]
        yield DELIMITER.join(parts)

    yield ""


def generate(rnd: random.Random, batches: int, batch_size: int) -> Iterator[str]:
    for i in range(1, batches + 1):
        logger.info(f"writing batch {i} out of {batches}...")
        yield from generate_batch(rnd, batch_size)


def write_test_data(path: Path, batches: int, batch_size: int, seed: Optional[int] = None) -> int:
    """Write the generated log to path. Returns the number of lines written."""
    rnd = random.Random(seed)
    written = 0
    with path.open("w", encoding=FILE_ENCODING, newline="\n") as fh:
        for line in generate(rnd, batches, batch_size):
            fh.write(line + "\n")
            written += 1
    return written


def main(argv: Optional[list] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if args.batches < 1 or args.batch_size < 1:
        print("[ERROR] batches and batch size must be positive", file=sys.stderr)
        return 2

    output = Path(args.output).resolve()
    logger.info(f"creating {args.batches} batches of size {args.batch_size}")

    started = datetime.now()
    written = write_test_data(output, args.batches, args.batch_size, seed=args.seed)
    elapsed = (datetime.now() - started).total_seconds()

    print(f"Done! Wrote {written} lines to {output}")
    print(f"Execution time: {elapsed:.1f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
