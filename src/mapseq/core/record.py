"""Parsing and validation of image description records."""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping

from mapseq import constants
from mapseq.exceptions import FieldParseError

_SEQUENCE_ID_RE = re.compile(r"[+-]?[0-9]+")
_CAPTURE_TIME_RE = re.compile(constants.CAPTURE_TIME_PATTERN)
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class ParsedImage:
    """Values read from one image record, before any rewrite."""

    source_sequence_id: int
    longitude: float
    latitude: float
    capture_time: datetime  # timezone-aware

    @property
    def point(self) -> tuple[float, float]:
        """Position as (latitude, longitude), the order geopy expects."""
        return (self.latitude, self.longitude)

    @property
    def capture_time_utc(self) -> datetime:
        return self.capture_time.astimezone(timezone.utc)


def is_error_record(entry: Mapping[str, Any]) -> bool:
    """Return True if the record was flagged as failed by an earlier tool."""
    return constants.ERROR_KEY in entry


def parse_sequence_id(entry: Mapping[str, Any], index: int) -> int:
    key = constants.SEQUENCE_UUID_KEY
    value = entry.get(key)
    if not isinstance(value, str):
        raise FieldParseError(index, key, f"expected a string, got {value!r}")
    if not _SEQUENCE_ID_RE.fullmatch(value):
        raise FieldParseError(index, key, f"not an integer: {value!r}")
    parsed = int(value)
    if not _INT64_MIN <= parsed <= _INT64_MAX:
        raise FieldParseError(index, key, f"out of 64-bit range: {value!r}")
    return parsed


def parse_coordinate(entry: Mapping[str, Any], key: str, index: int) -> float:
    value = entry.get(key)
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldParseError(index, key, f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise FieldParseError(index, key, f"not a finite number: {value!r}")
    return float(value)


def parse_capture_time(value: Any, zone: tzinfo, index: int = 0) -> datetime:
    """Parse a capture time string recorded in ``zone``.

    Local times skipped or repeated by a DST change are rejected, since they
    do not map to a single instant.

    Args:
        value: Raw ``MAPCaptureTime`` value, e.g. ``"2023_05_01_12_30_45_123"``
        zone: Timezone the camera clock was set to
        index: Record position, used in error messages

    Returns:
        Timezone-aware datetime in ``zone``

    Raises:
        FieldParseError: If the value is not a valid, unambiguous time
    """
    key = constants.CAPTURE_TIME_KEY
    if not isinstance(value, str):
        raise FieldParseError(index, key, f"expected a string, got {value!r}")
    if not _CAPTURE_TIME_RE.fullmatch(value):
        raise FieldParseError(index, key, f"does not match YYYY_MM_DD_HH_MM_SS_fff: {value!r}")
    try:
        naive = datetime.strptime(value, constants.CAPTURE_TIME_FORMAT)
    except ValueError as exc:
        raise FieldParseError(index, key, str(exc)) from exc

    local = naive.replace(tzinfo=zone)
    try:
        round_trip = local.astimezone(timezone.utc).astimezone(zone).replace(tzinfo=None)
    except OverflowError as exc:
        raise FieldParseError(index, key, f"{value!r} is out of range in UTC") from exc
    if round_trip != naive:
        raise FieldParseError(index, key, f"{value!r} does not exist in {zone}")
    if local.utcoffset() != naive.replace(tzinfo=zone, fold=1).utcoffset():
        raise FieldParseError(index, key, f"{value!r} is ambiguous in {zone}")
    return local


def format_capture_time(value: datetime) -> str:
    """Format a datetime as ``YYYY_MM_DD_HH_MM_SS_fff`` (milliseconds, truncated)."""
    return f"{value.year:04d}_{value.strftime('%m_%d_%H_%M_%S')}_{value.microsecond // 1000:03d}"


def to_utc_capture_time(value: datetime) -> str:
    """Convert an aware capture time to a UTC capture time string."""
    return format_capture_time(value.astimezone(timezone.utc))


def parse_image(entry: Mapping[str, Any], zone: tzinfo, index: int) -> ParsedImage:
    """Parse the fields the sequencer needs from one record.

    Raises:
        FieldParseError: On the first field that cannot be parsed
    """
    source_sequence_id = parse_sequence_id(entry, index)
    longitude = parse_coordinate(entry, constants.LONGITUDE_KEY, index)
    latitude = parse_coordinate(entry, constants.LATITUDE_KEY, index)
    if not -90.0 <= latitude <= 90.0:
        raise FieldParseError(index, constants.LATITUDE_KEY, f"out of range: {latitude}")
    capture_time = parse_capture_time(entry.get(constants.CAPTURE_TIME_KEY), zone, index)
    return ParsedImage(
        source_sequence_id=source_sequence_id,
        longitude=longitude,
        latitude=latitude,
        capture_time=capture_time,
    )
