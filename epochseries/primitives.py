"""
Adapters over the instant and duration types epochseries walks.

The series only relies on ordering, ``+``/``-`` between instants and durations,
and on turning a duration into seconds. pandas, numpy and stdlib types also
expose an exact integer nanosecond count, which is preferred for counting.
"""
import math
import re
from datetime import timedelta
from typing import Any, Optional

import numpy as np
import pandas as pd
from pandas.errors import OutOfBoundsDatetime, OutOfBoundsTimedelta

from epochseries.errors import EpochParseError

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICROSECOND = 1_000

# Raised by instant arithmetic that leaves the representable range
EPOCH_OVERFLOW_ERRORS = (OverflowError, OutOfBoundsDatetime, OutOfBoundsTimedelta)

# Trailing time scale token, e.g. "2022-07-14T02:56:11.228271007 UTC"
_TIMESCALE_RE = re.compile(r"^(?P<body>.+?)\s+(?P<scale>[A-Za-z]{2,4})$")


def in_seconds(duration: Any) -> float:
    """
    Convert a duration to signed seconds.

    Args:
        duration: pandas/stdlib timedelta, numpy timedelta64, or any object
            with an ``in_seconds()`` method

    Returns:
        Seconds as a float (NaN for not-a-time values)
    """
    if duration is pd.NaT:
        return math.nan
    if hasattr(duration, "in_seconds"):
        return float(duration.in_seconds())
    if isinstance(duration, pd.Timedelta):
        # total_seconds() truncates to whole microseconds
        return duration.value / NANOS_PER_SECOND
    if isinstance(duration, np.timedelta64):
        if np.isnat(duration):
            return math.nan
        return float(duration / np.timedelta64(1, "s"))
    if hasattr(duration, "total_seconds"):
        return float(duration.total_seconds())
    raise TypeError(f"Cannot express {type(duration).__name__} as seconds")


def duration_ticks(duration: Any) -> Optional[int]:
    """
    Exact nanosecond count of a duration, or None if the type has none.
    """
    if duration is pd.NaT:
        return None
    if isinstance(duration, pd.Timedelta):
        return int(duration.value)
    if isinstance(duration, timedelta):
        micros = (duration.days * 86_400 + duration.seconds) * 1_000_000 + duration.microseconds
        return micros * NANOS_PER_MICROSECOND
    if isinstance(duration, np.timedelta64):
        if np.isnat(duration):
            return None
        try:
            return int(duration.astype("timedelta64[ns]").astype(np.int64))
        except (TypeError, ValueError):
            # Calendar units (months, years) have no fixed length
            return None
    return None


def duration_sign(duration: Any) -> Optional[int]:
    """Return -1, 0 or 1 for the direction of a duration, None if not finite."""
    ticks = duration_ticks(duration)
    if ticks is not None:
        return (ticks > 0) - (ticks < 0)

    seconds = in_seconds(duration)
    if not math.isfinite(seconds):
        return None
    return (seconds > 0) - (seconds < 0)


def parse_epoch(text: str) -> pd.Timestamp:
    """
    Parse an ISO 8601 instant into a UTC ``pandas.Timestamp``.

    A trailing time scale token is accepted as long as it is UTC. Naive
    instants are taken as UTC; offsets are converted to UTC.

    Example:
        parse_epoch("2022-07-14T02:56:11.228271007 UTC")
    """
    raw = str(text).strip()
    match = _TIMESCALE_RE.match(raw)
    if match:
        scale = match.group("scale").upper()
        if scale != "UTC":
            raise EpochParseError(f"Unsupported time scale {scale!r} in {text!r} (only UTC)")
        raw = match.group("body")

    try:
        stamp = pd.Timestamp(raw)
    except (ValueError, TypeError, OverflowError) as e:
        raise EpochParseError(f"Invalid epoch {text!r}: {e}") from e

    if stamp is pd.NaT:
        raise EpochParseError(f"Invalid epoch {text!r}: not a time")

    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def parse_duration(text: str) -> pd.Timedelta:
    """Parse duration text such as ``"2h"``, ``"0.5us"`` or ``"2 hours"``."""
    raw = str(text).strip()
    try:
        value = pd.Timedelta(raw)
    except (ValueError, TypeError, OverflowError) as e:
        raise EpochParseError(f"Invalid duration {text!r}: {e}") from e

    if value is pd.NaT:
        raise EpochParseError(f"Invalid duration {text!r}: not a time")
    return value


def epoch_nanos(epoch: Any) -> int:
    """Nanoseconds since the Unix epoch (UTC for aware instants)."""
    try:
        stamp = pd.Timestamp(epoch)
    except (ValueError, TypeError) as e:
        raise EpochParseError(f"Cannot convert {epoch!r} to nanoseconds: {e}") from e
    if stamp is pd.NaT:
        raise EpochParseError(f"Cannot convert {epoch!r} to nanoseconds: not a time")
    return int(stamp.value)
