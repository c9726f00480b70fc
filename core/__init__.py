"""
Flight Stats - Core Module
Record model, unit normalization and flight statistics.
"""

from .models import (
    Observatory,
    Other,
    Record,
    FlightStats,
    create_observatory,
    observatory_name,
)
from .units import normalize, normalize_records
from .flight_stats import calculate_flight_stats

__all__ = [
    "Observatory", "Other", "Record", "FlightStats",
    "create_observatory", "observatory_name",
    "normalize", "normalize_records",
    "calculate_flight_stats",
]
