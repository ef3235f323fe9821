"""Utility functions for common operations."""

import math
import re
from dataclasses import dataclass

_HMS_PATTERN = re.compile(r"^(\d{1,2}):(\d{1,2}):(\d{1,2})$")
_MS_PATTERN = re.compile(r"^(\d{1,2}):(\d{1,2})$")


@dataclass(frozen=True)
class TimestampValidation:
    """Outcome of validating a user- or model-supplied timestamp."""

    valid: bool
    normalized: str | None = None
    error: str | None = None


def _render(hours: int, minutes: int, seconds: int) -> str:
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def validate_and_normalize_timestamp(timestamp: str) -> TimestampValidation:
    """
    Validate a timestamp and normalize it to zero-padded form.

    Examples:
        "9:5" -> "09:05"
        "1:02:03" -> "01:02:03"
        "0:12:30" -> "12:30"

    Args:
        timestamp: Time string in MM:SS or HH:MM:SS form

    Returns:
        TimestampValidation with the normalized string or an error message
    """
    timestamp = (timestamp or "").strip()

    hours = 0
    hms_match = _HMS_PATTERN.match(timestamp)
    ms_match = _MS_PATTERN.match(timestamp)

    if hms_match:
        hours, minutes, seconds = (int(part) for part in hms_match.groups())
    elif ms_match:
        minutes, seconds = (int(part) for part in ms_match.groups())
    else:
        return TimestampValidation(valid=False, error="Invalid format. Use MM:SS or HH:MM:SS")

    if hours > 23:
        return TimestampValidation(valid=False, error="Hours cannot exceed 23")
    if minutes > 59:
        return TimestampValidation(valid=False, error="Minutes cannot exceed 59")
    if seconds > 59:
        return TimestampValidation(valid=False, error="Seconds cannot exceed 59")

    return TimestampValidation(valid=True, normalized=_render(hours, minutes, seconds))


def seconds_to_timestamp(seconds: float) -> str:
    """
    Convert a second offset to MM:SS, or HH:MM:SS when at least an hour in.

    Examples:
        65 -> "01:05"
        3725.8 -> "01:02:05"
    """
    total = max(0, math.floor(seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return _render(hours, minutes, secs)


def timestamp_to_seconds(timestamp: str) -> int:
    """
    Convert a MM:SS or HH:MM:SS string to total seconds.

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    result = validate_and_normalize_timestamp(timestamp)
    if not result.valid or result.normalized is None:
        raise ValueError(result.error or f"Invalid timestamp: {timestamp}")

    total = 0
    for part in result.normalized.split(":"):
        total = total * 60 + int(part)
    return total


def comedian_key(name: str) -> str:
    """Identity key for a comedian: lowercase with whitespace runs as hyphens."""
    return re.sub(r"\s+", "-", name.strip().lower())
