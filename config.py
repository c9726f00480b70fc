"""
Flight Stats - Configuration
Central configuration for observatories, input format and logging.
"""

import os
from dataclasses import dataclass
from typing import Dict, Tuple

from dotenv import load_dotenv

load_dotenv()

# ============================================================================
# INPUT FORMAT
# ============================================================================

# <timestamp>|<x>,<y>|<temperature>|<observatory>
# e.g. 2014-12-31T13:44|10,5|243|AU
DELIMITER = "|"
FIELD_COUNT = 4

FILE_ENCODING = os.environ.get("FLIGHTSTATS_ENCODING", "utf-8")

# Timestamp layout written by the test-data generator
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"

# ============================================================================
# OBSERVATORY CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class ObservatoryUnits:
    """Native measurement units reported by an observatory."""
    code: str
    name: str
    temperature_unit: str  # celsius | fahrenheit | kelvin
    distance_unit: str  # km | miles | m


OBSERVATORY_UNITS: Dict[str, ObservatoryUnits] = {
    "AU": ObservatoryUnits(
        code="AU",
        name="Australia",
        temperature_unit="celsius",
        distance_unit="km",
    ),
    "US": ObservatoryUnits(
        code="US",
        name="United States",
        temperature_unit="fahrenheit",
        distance_unit="miles",
    ),
    "FR": ObservatoryUnits(
        code="FR",
        name="France",
        temperature_unit="kelvin",
        distance_unit="m",
    ),
}

# Any observatory not listed above
DEFAULT_UNITS = ObservatoryUnits(
    code="*",
    name="Other",
    temperature_unit="kelvin",
    distance_unit="km",
)


def get_observatory_units(code: str) -> ObservatoryUnits:
    """Return native units for an observatory code, falling back to defaults."""
    return OBSERVATORY_UNITS.get(code.upper(), DEFAULT_UNITS)

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

LOG_LEVEL = os.environ.get("FLIGHTSTATS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# ============================================================================
# TEST DATA GENERATOR
# ============================================================================

GENERATOR_BATCH_SIZE = int(os.environ.get("FLIGHTSTATS_BATCH_SIZE", "10000"))
GENERATOR_OUT_OF_ORDER_FREQ = 1000  # 1 line in N is out of order
GENERATOR_MAX_COORD = 100
GENERATOR_TEMP_RANGE: Tuple[int, int] = (-50, 100)  # observatory units, upper bound exclusive
GENERATOR_OBSERVATORIES = ["AU", "US", "FR", "RU", "DE", "Unknown"]
GENERATOR_OUTPUT = "testdata.txt"
