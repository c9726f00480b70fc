"""
Parse flight observation log lines.

Line layout (see config.DELIMITER):
    <timestamp>|<x>,<y>|<temperature>|<observatory>
    e.g. 2014-12-31T13:44|10,5|243|AU

Every field parser returns None on failure. A field is only accepted when the
whole field is consumed; leading/trailing spaces are tolerated, anything else
left over is a failure.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from config import DELIMITER, FIELD_COUNT, FILE_ENCODING
from core.models import AnyObservatory, Record, create_observatory

logger = logging.getLogger("observation_parser")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_SPACES = r"[ \t\r\n]*"
_SIGNED_INT = r"[+-]?[0-9]+"
_ZONE = r"[Zz]|[+-][0-9]{2}:?[0-9]{2}"

# Whitespace is allowed around every date/time separator, e.g. "2014 -12-31T13:  44".
# A bare whitespace run between date and time is matched by its own branch so
# the separator never has two ways to split the same run.
_TIMESTAMP_RE = re.compile(
    rf"{_SPACES}([0-9]{{4}}){_SPACES}([-/]){_SPACES}([0-9]{{1,2}}){_SPACES}\2{_SPACES}([0-9]{{1,2}})"
    rf"(?:(?:{_SPACES}[Tt]{_SPACES}|[ \t\r\n]+)([0-9]{{1,2}}){_SPACES}:{_SPACES}([0-9]{{1,2}})"
    rf"(?:{_SPACES}:{_SPACES}([0-9]{{1,2}})(?:\.([0-9]+))?)?"
    rf"(?:{_SPACES}({_ZONE}))?)?{_SPACES}"
)
_OFFSET_RE = re.compile(r"([+-])([0-9]{2}):?([0-9]{2})")

_LOCATION_RE = re.compile(rf"{_SPACES}({_SIGNED_INT}){_SPACES},{_SPACES}({_SIGNED_INT}){_SPACES}")
_TEMPERATURE_RE = re.compile(rf"{_SPACES}({_SIGNED_INT}){_SPACES}")
_OBSERVATORY_RE = re.compile(rf"{_SPACES}([^\W_]+){_SPACES}")


def _to_int64(token: str) -> Optional[int]:
    value = int(token)
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return None


def parse_timestamp(text: str) -> Optional[datetime]:
    """
    Parse a date-time field such as 2014-12-31T13:44.

    Reads up to the field delimiter. Calendar and clock ranges are checked by
    datetime itself, so 2000-02-30, hour 25 and second 60 are rejected.

    A trailing zone designator (Z or +HH:MM) yields an aware datetime in UTC;
    timestamps without one stay naive.
    """
    candidate = text.split(DELIMITER, 1)[0]
    match = _TIMESTAMP_RE.fullmatch(candidate)
    if not match:
        return None

    year, _sep, month, day, hour, minute, second, fraction, zone = match.groups()
    microsecond = int(fraction.ljust(6, "0")[:6]) if fraction else 0
    try:
        value = datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            microsecond,
        )
    except ValueError:
        return None

    if zone is None:
        return value
    tz = _parse_zone(zone)
    if tz is None:
        return None
    try:
        return value.replace(tzinfo=tz).astimezone(timezone.utc)
    except OverflowError:
        # e.g. 0001-01-01T00:00+02:00 falls before datetime.min in UTC
        return None


def _parse_zone(zone: str) -> Optional[timezone]:
    offset = _OFFSET_RE.fullmatch(zone.upper().replace("Z", "+00:00"))
    if not offset:
        return None
    sign, hours, minutes = offset.groups()
    if int(minutes) >= 60:
        return None
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    try:
        return timezone(-delta if sign == "-" else delta)
    except ValueError:
        # offsets of 24 hours or more
        return None


def parse_location(text: str) -> Optional[Tuple[int, int]]:
    """Parse an `x,y` pair of 64-bit signed integers."""
    match = _LOCATION_RE.fullmatch(text)
    if not match:
        return None
    x = _to_int64(match.group(1))
    y = _to_int64(match.group(2))
    if x is None or y is None:
        return None
    return (x, y)


def parse_temperature(text: str) -> Optional[Decimal]:
    match = _TEMPERATURE_RE.fullmatch(text)
    if not match:
        return None
    value = _to_int64(match.group(1))
    if value is None:
        return None
    return Decimal(value)


def parse_observatory(text: str) -> Optional[AnyObservatory]:
    """Parse a single alphanumeric observatory code (case-insensitive)."""
    match = _OBSERVATORY_RE.fullmatch(text)
    if not match:
        return None
    return create_observatory(match.group(1))


def parse_line(line: str) -> Optional[Record]:
    """
    Parse one log line into a Record.

    Returns None unless the line has exactly four fields and each of them
    parses in the fixed order timestamp, location, temperature, observatory.
    """
    parts = line.split(DELIMITER)
    if len(parts) != FIELD_COUNT:
        return None

    raw_timestamp, raw_location, raw_temperature, raw_observatory = parts

    timestamp = parse_timestamp(raw_timestamp)
    if timestamp is None:
        return None
    location = parse_location(raw_location)
    if location is None:
        return None
    temperature = parse_temperature(raw_temperature)
    if temperature is None:
        return None
    observatory = parse_observatory(raw_observatory)
    if observatory is None:
        return None

    return Record(
        timestamp=timestamp,
        location=location,
        temperature=temperature,
        observatory=observatory,
    )


def parse_lines(lines: Iterable[str]) -> Iterator[Record]:
    """Lazily parse lines, skipping the ones that do not parse."""
    read = 0
    skipped = 0
    for line_no, line in enumerate(lines, start=1):
        read += 1
        record = parse_line(line.rstrip("\r\n"))
        if record is None:
            skipped += 1
            logger.debug(f"Skipping line {line_no}: {line.strip()!r}")
            continue
        yield record

    logger.info(f"Lines read: {read} | parsed: {read - skipped} | skipped: {skipped}")


def parse_file(path: Union[str, Path]) -> Iterator[Record]:
    """
    Lazily parse a log file.

    The existence check happens on call, the file itself is read while the
    returned iterator is consumed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"file {file_path} doesn't exist")

    logger.info(f"Reading observations from {file_path}")
    return _read_records(file_path)


def _read_records(file_path: Path) -> Iterator[Record]:
    with file_path.open("r", encoding=FILE_ENCODING) as fh:
        yield from parse_lines(fh)
