"""
Flight Stats - Collector Module
Reads flight observation logs into typed records.
"""

from .observation_parser import (
    parse_file,
    parse_line,
    parse_lines,
    parse_location,
    parse_observatory,
    parse_temperature,
    parse_timestamp,
)

__all__ = [
    "parse_file", "parse_line", "parse_lines",
    "parse_timestamp", "parse_location", "parse_temperature", "parse_observatory",
]
