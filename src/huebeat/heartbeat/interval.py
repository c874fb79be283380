# ABOUTME: Interval parsing utility for poll cadences
# ABOUTME: Converts duration strings (e.g., "10s", "1m30s", "500ms") or seconds to timedelta objects

import re
from datetime import timedelta

DEFAULT_INTERVAL = timedelta(seconds=10)

# Longest unit first so "ms" is not read as "m" followed by "s"
_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|d|h|m|s)")

_UNITS = {
    "d": "days",
    "h": "hours",
    "m": "minutes",
    "s": "seconds",
    "ms": "milliseconds",
}


def parse_interval(duration: str | float | timedelta | None) -> timedelta:
    """
    Parse a poll interval into a timedelta.

    Accepts a timedelta, a number of seconds, or a duration string combining
    d, h, m, s and ms units ("10s", "1m30s", "500ms"). Empty values fall back
    to DEFAULT_INTERVAL.

    Raises:
        ValueError: If the value is not positive or the string can't be parsed

    Examples:
        >>> parse_interval("1m30s")
        datetime.timedelta(seconds=90)
        >>> parse_interval(2.5)
        datetime.timedelta(seconds=2, microseconds=500000)
    """
    if duration is None:
        return DEFAULT_INTERVAL

    if isinstance(duration, timedelta):
        if duration <= timedelta(0):
            raise ValueError(f"Interval must be positive. Got: {duration}")
        return duration

    if isinstance(duration, bool):
        raise ValueError(f"Invalid interval: {duration!r}")

    if isinstance(duration, (int, float)):
        if duration <= 0:
            raise ValueError(f"Interval must be positive. Got: {duration}")
        return timedelta(seconds=duration)

    text = duration.strip().lower()
    if not text:
        return DEFAULT_INTERVAL

    if "-" in text:
        raise ValueError("Interval values must be positive")

    matches = _PATTERN.findall(text)
    # Everything in the string has to be consumed by unit groups
    if not matches or _PATTERN.sub("", text).strip():
        raise ValueError(
            f"Invalid interval format: '{duration}'. "
            "Expected format like '10s', '1m30s', '500ms', etc."
        )

    kwargs: dict[str, float] = {}
    for value_str, unit in matches:
        value = float(value_str)
        if value <= 0:
            raise ValueError(f"Interval values must be positive. Got: {value_str}{unit}")
        param = _UNITS[unit]
        kwargs[param] = kwargs.get(param, 0.0) + value

    return timedelta(**kwargs)
