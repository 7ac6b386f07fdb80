"""Utility helpers for working with durations and scan timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Union


class DurationParseError(ValueError):
    """Raised when a configured duration cannot be parsed."""


def parse_duration(duration: Union[str, int, float]) -> float:
    """Convert a duration setting to seconds.

    Args:
        duration: A value representing the duration. Accepts:
            - int or float: already in seconds.
            - str: either seconds or formatted as HH:MM:SS.

    Returns:
        The duration expressed in seconds.

    Raises:
        DurationParseError: If the input cannot be parsed.
    """

    if isinstance(duration, bool):
        raise DurationParseError(f"Unsupported duration format: {duration!r}")

    if isinstance(duration, (int, float)):
        if duration < 0:
            raise DurationParseError("Duration cannot be negative.")
        return float(duration)

    if isinstance(duration, str):
        token = duration.strip()
        if not token:
            raise DurationParseError("Duration string is empty.")

        if token.isdigit():
            return parse_duration(int(token))

        match = re.fullmatch(r"(\d{1,2}):([0-5]\d):([0-5]\d)", token)
        if match:
            hours, minutes, seconds = map(int, match.groups())
            return float(hours * 3600 + minutes * 60 + seconds)

    raise DurationParseError(f"Unsupported duration format: {duration!r}")


def format_seconds(seconds: float) -> str:
    """Format seconds into HH:MM:SS."""

    if seconds < 0:
        raise ValueError("Seconds cannot be negative.")
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def utc_timestamp(moment: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""

    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
