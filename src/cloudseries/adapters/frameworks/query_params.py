"""Shared query parameter parsing utilities for framework adapters.

Time parameters accept Unix seconds or a relative offset such as
"-1h" (one hour before ``now``).
"""

import re
import time

from cloudseries.core.models import TimeWindow

# Default window when "from" is omitted
DEFAULT_RANGE_SECONDS = 24 * 60 * 60

_UNITS = {"s": 1, "min": 60, "h": 3600, "d": 86400, "w": 604800}
_RELATIVE = re.compile(r"^-(\d+)(s|min|h|d|w)$")


def _parse_time_param(value: str | None, now: int, default: int) -> int:
    """Parse an absolute or relative time parameter.

    Args:
        value: Raw parameter value, or None when missing.
        now: Reference time for relative offsets.
        default: Value returned when the parameter is missing or empty.

    Returns:
        Unix timestamp in seconds.

    Raises:
        ValueError: If the value is neither a timestamp nor an offset, or
            is negative, NaN or infinite.
    """
    if value is None or value == "":
        return default
    if value == "now":
        return now
    match = _RELATIVE.match(value)
    if match:
        return now - int(match.group(1)) * _UNITS[match.group(2)]
    number = float(value)
    # Reject negative, NaN, and infinite values
    if number < 0 or number != number or number in (float("inf"), float("-inf")):
        raise ValueError(f"Invalid time value: {value!r}")
    return int(number)


def _parse_window_params(
    from_param: str | None, until_param: str | None, now: int | None = None
) -> TimeWindow:
    """Build a time window from "from" and "until" parameters.

    Raises:
        ValueError: If a value is malformed or the window is empty.
    """
    now = int(time.time()) if now is None else now
    end = _parse_time_param(until_param, now, default=now)
    start = _parse_time_param(from_param, now, default=end - DEFAULT_RANGE_SECONDS)
    if start >= end:
        raise ValueError("'from' must be earlier than 'until'")
    return TimeWindow(start=start, end=end)
