"""
Flight Statistics - Streaming aggregation of normalized records

Computes, in a single pass over the records:
- Temperature extrema and mean (Kelvin)
- Number of observations per observatory
- Total distance travelled (meters)

The fold is order-sensitive: the mean is updated incrementally and the
distance is accumulated step by step between consecutive locations.
"""

import logging
import math
from decimal import Decimal
from typing import Iterable

from core.models import FlightStats, Location, Record, observatory_name

logger = logging.getLogger("flight_stats")


# =============================================================================
# Step functions
# =============================================================================

def incremental_mean(acc: Decimal, x: Decimal, n: int) -> Decimal:
    """
    Update a running mean with one more value.

    Args:
        acc: Current mean
        x: New value
        n: Number of values the current mean was computed from

    Returns:
        Mean of n + 1 values
    """
    return (acc * Decimal(n) + Decimal(x)) / Decimal(n + 1)


def step_distance(start: Location, end: Location) -> int:
    """
    Euclidean distance between two locations, truncated to whole meters.

    The square root is taken in floating point; callers accumulate the
    truncated steps as exact integers.
    """
    x1, y1 = start
    x2, y2 = end
    squared = (x2 - x1) ** 2 + (y2 - y1) ** 2
    return int(math.sqrt(float(squared)))


# =============================================================================
# Fold
# =============================================================================

def create_initial_stats(record: Record) -> FlightStats:
    return FlightStats(
        min_temp=record.temperature,
        max_temp=record.temperature,
        mean_temp=record.temperature,
        last_location=record.location,
        distance=0,
        number_of_records=1,
        observations={observatory_name(record.observatory): 1},
    )


def update_stats(stats: FlightStats, record: Record) -> FlightStats:
    """Fold one record into the running statistics."""
    name = observatory_name(record.observatory)
    stats.observations[name] = stats.observations.get(name, 0) + 1

    stats.min_temp = min(stats.min_temp, record.temperature)
    stats.max_temp = max(stats.max_temp, record.temperature)
    stats.mean_temp = incremental_mean(stats.mean_temp, record.temperature, stats.number_of_records)
    stats.distance += step_distance(stats.last_location, record.location)
    stats.last_location = record.location
    stats.number_of_records += 1
    return stats


def calculate_flight_stats(records: Iterable[Record]) -> FlightStats:
    """
    Aggregate normalized records into FlightStats.

    The iterable is consumed once, so generators stream without buffering.

    The first record seeds the statistics and is counted in `observations`,
    so the counts always add up to `number_of_records` and a single record
    yields a single-entry count.

    Raises:
        ValueError: if there are no records
    """
    iterator = iter(records)
    first = next(iterator, None)
    if first is None:
        raise ValueError("no records were found")

    stats = create_initial_stats(first)
    for record in iterator:
        stats = update_stats(stats, record)

    logger.info(
        f"Aggregated {stats.number_of_records} records from "
        f"{len(stats.observations)} observatories"
    )
    return stats
