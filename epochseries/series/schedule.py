"""
Materialize evenly spaced epochs as numpy/pandas arrays.
"""
from typing import Any

import numpy as np
import pandas as pd

from epochseries.errors import InvalidStepError
from epochseries.primitives import duration_ticks, epoch_nanos
from epochseries.series.length import tick_count
from epochseries.series.time_series import check_step

_INT64_MAX = np.iinfo(np.int64).max
_INT64_MIN = np.iinfo(np.int64).min


def epoch_array(
    start: Any,
    end: Any,
    step: Any,
    inclusive: bool = False,
) -> np.ndarray:
    """
    Create the elements of a time series as ``datetime64[ns]`` values.

    Example:
        start=00:00, end=12:00, step=2h -> [00:00, 02:00, ..., 10:00]
        same with inclusive=True        -> [00:00, 02:00, ..., 12:00]

    Aware epochs are expressed in UTC. Raises InvalidStepError for steps the
    iterator rejects, and OverflowError if the last element leaves the int64
    nanosecond range.
    """
    check_step(start, end, step)

    stride = duration_ticks(step)
    if stride is None:
        raise InvalidStepError(f"Step {step!r} has no exact nanosecond length")

    start_ns = epoch_nanos(start)
    end_ns = epoch_nanos(end)
    count = tick_count(end_ns - start_ns, stride, inclusive)
    if count <= 0:
        return np.array([], dtype="datetime64[ns]")

    last_ns = start_ns + (count - 1) * stride
    if not (_INT64_MIN < last_ns <= _INT64_MAX):
        raise OverflowError(
            f"Cannot generate {count} epochs from {start} by {step}: beyond datetime64[ns] range"
        )

    values = start_ns + stride * np.arange(count, dtype=np.int64)
    return values.astype("datetime64[ns]")


def epoch_index(
    start: Any,
    end: Any,
    step: Any,
    inclusive: bool = False,
) -> pd.DatetimeIndex:
    """Same as ``epoch_array`` but as a DatetimeIndex in the start's timezone."""
    values = epoch_array(start, end, step, inclusive=inclusive)
    index = pd.DatetimeIndex(values)

    tz = pd.Timestamp(start).tz
    if tz is not None:
        index = index.tz_localize("UTC").tz_convert(tz)
    return index
