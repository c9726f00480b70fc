"""
Tests for the flight statistics fold.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from collector.observation_parser import parse_lines
from core.flight_stats import (
    calculate_flight_stats,
    incremental_mean,
    step_distance,
)
from core.models import Observatory, Other, Record
from core.units import normalize_records

START = datetime(2006, 8, 27, 11, 17)


def _records(*items):
    """items: (temperature, observatory, location)"""
    return [
        Record(
            timestamp=START + timedelta(minutes=i),
            location=location,
            temperature=Decimal(temperature),
            observatory=observatory,
        )
        for i, (temperature, observatory, location) in enumerate(items)
    ]


class TestStepFunctions:

    def test_incremental_mean(self):
        assert incremental_mean(Decimal(10), Decimal(20), 1) == Decimal(15)
        assert incremental_mean(Decimal(15), Decimal(30), 2) == Decimal(20)

    def test_step_distance_exact(self):
        assert step_distance((0, 0), (3, 4)) == 5
        assert step_distance((3, 4), (0, 0)) == 5

    def test_step_distance_truncates(self):
        # sqrt(2) = 1.414...
        assert step_distance((0, 0), (1, 1)) == 1
        # sqrt(8) = 2.828...
        assert step_distance((0, 0), (2, 2)) == 2

    def test_step_distance_same_point(self):
        assert step_distance((7, 7), (7, 7)) == 0


class TestCalculateFlightStats:

    def test_empty_input_fails(self):
        with pytest.raises(ValueError, match="no records"):
            calculate_flight_stats([])

    def test_empty_generator_fails(self):
        with pytest.raises(ValueError):
            calculate_flight_stats(r for r in [])

    def test_single_record(self):
        records = _records((250, Observatory.FR, (5, 6)))

        stats = calculate_flight_stats(records)

        assert stats.min_temp == Decimal(250)
        assert stats.max_temp == Decimal(250)
        assert stats.mean_temp == Decimal(250)
        assert stats.distance == 0
        assert stats.observations == {"FR": 1}
        assert stats.last_location == (5, 6)
        assert stats.number_of_records == 1

    def test_extrema_and_mean(self):
        records = _records(
            (10, Observatory.FR, (0, 0)),
            (20, Observatory.FR, (0, 0)),
            (30, Observatory.FR, (0, 0)),
        )

        stats = calculate_flight_stats(records)

        assert stats.min_temp == Decimal(10)
        assert stats.max_temp == Decimal(30)
        assert stats.mean_temp == Decimal(20)
        assert stats.distance == 0
        assert stats.number_of_records == 3

    def test_distance_follows_last_location(self):
        records = _records(
            (1, Observatory.FR, (0, 0)),
            (1, Observatory.FR, (3, 4)),
            (1, Observatory.FR, (0, 0)),
            (1, Observatory.FR, (1, 1)),
        )

        stats = calculate_flight_stats(records)

        # 5 + 5 + trunc(sqrt(2))
        assert stats.distance == 11
        assert stats.last_location == (1, 1)

    def test_distance_is_exact_for_large_coordinates(self):
        big = 10 ** 15
        records = _records(
            (1, Observatory.FR, (0, 0)),
            (1, Observatory.FR, (big, 0)),
            (1, Observatory.FR, (0, 0)),
        )

        stats = calculate_flight_stats(records)

        assert stats.distance == 2 * big
        assert isinstance(stats.distance, int)

    def test_observations_per_observatory(self):
        records = _records(
            (1, Observatory.AU, (0, 0)),
            (1, Observatory.US, (0, 0)),
            (1, Other("DE"), (0, 0)),
            (1, Observatory.AU, (0, 0)),
            (1, Other("RU"), (0, 0)),
            (1, Other("DE"), (0, 0)),
        )

        stats = calculate_flight_stats(records)

        assert stats.observations == {"AU": 2, "US": 1, "DE": 2, "RU": 1}
        assert sum(stats.observations.values()) == stats.number_of_records

    def test_order_matters_for_distance(self):
        forward = _records(
            (1, Observatory.FR, (0, 0)),
            (1, Observatory.FR, (3, 4)),
            (1, Observatory.FR, (6, 8)),
        )
        shuffled = [forward[0], forward[2], forward[1]]

        assert calculate_flight_stats(forward).distance == 10
        assert calculate_flight_stats(shuffled).distance == 15


def test_same_location_us_records():
    records = list(normalize_records(_records(
        (36, Observatory.US, (12, 56)),
        (88, Observatory.US, (12, 56)),
        (39, Observatory.US, (12, 56)),
    )))

    stats = calculate_flight_stats(records)

    expected_mean = sum(r.temperature for r in records) / 3
    assert abs(stats.mean_temp - expected_mean) < Decimal("1e-20")
    assert stats.distance == 0
    assert stats.observations == {"US": 3}


def test_pipeline_skips_malformed_lines_in_order():
    lines = [
        "2006-08-27T11:17|12,56|36|FR",
        "",
        "2006-08-27T11:18|15,60|88|FR",
        "2006-08-27T11:19|15,60|39|FR|extra",
        "",
        "2006-08-27T11:20|15,60|-5|FR",
        "2006-08-27T11:21|18,64|40|FR",
    ]

    stats = calculate_flight_stats(normalize_records(parse_lines(lines)))

    assert stats.number_of_records == 3
    assert stats.min_temp == Decimal(36)
    assert stats.max_temp == Decimal(88)
    assert stats.distance == 10
    assert stats.observations == {"FR": 3}


def test_batch_of_seven_us_lines():
    lines = [
        "2006-08-27T11:17|12,56|36|US",
        "2006-08-27T11:18|31,51|88|US",
        "2006-08-27T11:19|52,94|39|US",
        "2006-08-27T11:20|86,92|90|US",
        "2006-08-27T11:21|74,25|46|US",
        "2006-08-27T11:22|49,77|43|US",
        "2006-08-27T11:23|74,72|82|US",
    ]

    stats = calculate_flight_stats(normalize_records(parse_lines(lines)))

    assert stats.number_of_records == 7
    assert stats.observations == {"US": 7}
    assert stats.last_location == (74 * 1609, 72 * 1609)
    assert stats.min_temp < stats.max_temp
