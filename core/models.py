from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Tuple, Union


class Observatory(Enum):
    """Observatories with known native units."""
    AU = "AU"
    US = "US"
    FR = "FR"


_KNOWN_CODES = {observatory.value for observatory in Observatory}


@dataclass(frozen=True)
class Other:
    """
    Any observatory outside the known set.
    Carries the upper-cased code as it appeared in the log.
    """
    code: str

    def __post_init__(self):
        if not self.code.isalnum() or self.code != self.code.upper():
            raise ValueError(f"Invalid observatory code: {self.code!r}")
        if self.code in _KNOWN_CODES:
            raise ValueError(f"Observatory {self.code} is not an Other observatory")


AnyObservatory = Union[Observatory, Other]
Location = Tuple[int, int]


def create_observatory(name: str) -> AnyObservatory:
    code = name.upper()
    try:
        return Observatory(code)
    except ValueError:
        return Other(code)


def observatory_name(observatory: AnyObservatory) -> str:
    """Display name used as the key of per-observatory counts."""
    if isinstance(observatory, Other):
        return observatory.code
    return observatory.value


@dataclass(frozen=True)
class Record:
    """
    One successfully parsed log line.

    Parsed records carry the observatory's native units; `core.units.normalize`
    returns a new record in Kelvin and meters.
    """
    timestamp: datetime
    location: Location
    temperature: Decimal
    observatory: AnyObservatory


@dataclass
class FlightStats:
    """
    Running flight statistics (Kelvin, meters).
    Seeded from the first record, updated once per following record.
    """
    min_temp: Decimal
    max_temp: Decimal
    mean_temp: Decimal
    last_location: Location
    distance: int = 0
    number_of_records: int = 1
    # observatory display name -> number of records
    observations: Dict[str, int] = field(default_factory=dict)
