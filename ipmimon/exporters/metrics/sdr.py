"""Parser for ``ipmitool sdr`` output.

Each data row looks like::

    Planar VBAT      | 3.05 Volts        | ok
    Fan 1            | 0x00              | ok
    DASD Backplane 3 | Not Readable      | ns

Only rows whose reading starts with a decimal number are measurements; the
rest (discrete bitmask readings, unreadable sensors) are dropped unless the
caller asks to keep them.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from ...errors import MalformedOutputError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
STATUS_OK = "ok"

# Plain decimal only: float() would also accept "nan", "inf", "1e3" and "1_0"
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_WHITESPACE_RE = re.compile(r"\s+")

UNITS = {
    "degrees C": "degrees_c",
    "degrees F": "degrees_f",
    "Volts": "volts",
    "Watts": "watts",
    "Amps": "amps",
    "RPM": "rpm",
    "feet": "feet",
    "Percent": "percent",
}


@dataclass
class SensorReading:
    """One normalized sdr row"""
    name: str
    value: float
    status: int
    unit: Optional[str] = None


def canonical_name(raw: str) -> str:
    """Lowercase the sensor name and join its words with underscores"""
    return _WHITESPACE_RE.sub("_", raw.strip().lower())


def canonical_unit(phrase: str) -> Optional[str]:
    """Map a unit phrase such as ``degrees C`` to its tag value, None when empty"""
    phrase = _WHITESPACE_RE.sub(" ", phrase.strip())
    if not phrase:
        return None
    if phrase in UNITS:
        return UNITS[phrase]
    return phrase.lower().replace(" ", "_")


def split_reading(raw_reading: str):
    """Split ``3.05 Volts`` into (3.05, "Volts"); value is None when the reading is not numeric"""
    parts = raw_reading.split(None, 1)
    if not parts or not _DECIMAL_RE.fullmatch(parts[0]):
        return None, ""
    unit_phrase = parts[1].strip() if len(parts) > 1 else ""
    return float(parts[0]), unit_phrase


def split_row(line: str):
    """Return the trimmed (name, reading, status) fields of a row, or None"""
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < 3:
        return None
    return tuple(f.strip() for f in fields[:3])


def parse_line(line: str, skip_non_numeric: bool = True) -> Optional[SensorReading]:
    row = split_row(line)
    if row is None:
        return None
    raw_name, raw_reading, raw_status = row
    if not raw_name:
        return None

    value, unit_phrase = split_reading(raw_reading)
    if value is None:
        if skip_non_numeric:
            return None
        value = 0.0

    return SensorReading(
        name=canonical_name(raw_name),
        value=value,
        status=1 if raw_status == STATUS_OK else 0,
        unit=canonical_unit(unit_phrase),
    )


def parse_output(output: Union[bytes, str], skip_non_numeric: bool = True,
                 server: Optional[str] = None) -> List[SensorReading]:
    """
    Parse a complete sdr dump, keeping line order.

    Raises:
        MalformedOutputError: the output has content but no line has the
            three-field row shape
    """
    raw = output
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")

    readings: List[SensorReading] = []
    rows = 0
    content = False
    for line in output.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        content = True
        if split_row(line) is None:
            logger.debug(f"skipping line without sensor fields: {line!r}")
            continue
        rows += 1
        reading = parse_line(line, skip_non_numeric)
        if reading is None:
            logger.debug(f"skipping non-numeric sensor row: {line!r}")
            continue
        readings.append(reading)

    if content and not rows:
        if isinstance(raw, str):
            raw = raw.encode()
        raise MalformedOutputError(raw, server)
    return readings
