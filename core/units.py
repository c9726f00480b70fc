"""
Unit normalization for flight observations.

Observatory units:
    AU  (celsius, km)
    US  (fahrenheit, miles)
    FR  (kelvin, m)
    any other observatory (kelvin, km)

Every record is converted to Kelvin and meters before aggregation.
"""

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional

from config import DEFAULT_UNITS, ObservatoryUnits, get_observatory_units
from core.models import AnyObservatory, Location, Other, Record, observatory_name

logger = logging.getLogger("units")

TemperatureConverter = Callable[[Decimal], Decimal]
LocationConverter = Callable[[int], int]

ABSOLUTE_ZERO_K = Decimal("0")
CELSIUS_OFFSET = Decimal("273.15")
FAHRENHEIT_OFFSET = Decimal("459.67")
FAHRENHEIT_SCALE = Decimal(5) / Decimal(9)

# Miles are truncated to whole meters to keep locations integral.
METERS_PER_MILE = 1609
METERS_PER_KM = 1000


def celsius_to_kelvin(celsius: Decimal) -> Decimal:
    return celsius + CELSIUS_OFFSET


def fahrenheit_to_kelvin(fahrenheit: Decimal) -> Decimal:
    return (fahrenheit + FAHRENHEIT_OFFSET) * FAHRENHEIT_SCALE


def _kelvin(value: Decimal) -> Decimal:
    return value


def _miles_to_meters(miles: int) -> int:
    return miles * METERS_PER_MILE


def _km_to_meters(km: int) -> int:
    return km * METERS_PER_KM


def _meters(value: int) -> int:
    return value


_TEMPERATURE_CONVERTERS = {
    "celsius": celsius_to_kelvin,
    "fahrenheit": fahrenheit_to_kelvin,
    "kelvin": _kelvin,
}

_LOCATION_CONVERTERS = {
    "miles": _miles_to_meters,
    "km": _km_to_meters,
    "m": _meters,
}


def _units_for(observatory: AnyObservatory) -> ObservatoryUnits:
    if isinstance(observatory, Other):
        return DEFAULT_UNITS
    return get_observatory_units(observatory.value)


def resolve_temperature_converter(observatory: AnyObservatory) -> TemperatureConverter:
    """Return the function converting the observatory's temperatures to Kelvin."""
    units = _units_for(observatory)
    return _TEMPERATURE_CONVERTERS[units.temperature_unit]


def resolve_location_converter(observatory: AnyObservatory) -> LocationConverter:
    """Return the function converting the observatory's coordinates to meters."""
    units = _units_for(observatory)
    return _LOCATION_CONVERTERS[units.distance_unit]


def normalize_temperature(temperature: Decimal, observatory: AnyObservatory) -> Decimal:
    convert = resolve_temperature_converter(observatory)
    return convert(temperature)


def normalize_location(location: Location, observatory: AnyObservatory) -> Location:
    convert = resolve_location_converter(observatory)
    x, y = location
    return (convert(x), convert(y))


def normalize(record: Record) -> Optional[Record]:
    """
    Convert a parsed record to Kelvin and meters.

    Returns None when the temperature is below absolute zero.
    """
    temperature = normalize_temperature(record.temperature, record.observatory)
    if temperature < ABSOLUTE_ZERO_K:
        return None

    return dataclasses.replace(
        record,
        temperature=temperature,
        location=normalize_location(record.location, record.observatory),
    )


def normalize_records(records: Iterable[Record]) -> Iterator[Record]:
    """Lazily normalize records, dropping the ones with invalid temperature."""
    for record in records:
        normalized = normalize(record)
        if normalized is None:
            logger.debug(
                f"Dropping record at {record.timestamp.isoformat()}: "
                f"{record.temperature} {observatory_name(record.observatory)} is below absolute zero"
            )
            continue
        yield normalized
