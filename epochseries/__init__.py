"""
epochseries: deterministic, evenly spaced sequences of time instants.

Walk a time range at a fixed cadence, forward or backward, with an exact
element count known up front and no accumulated floating point drift.
"""

__version__ = "0.1.0"

VERSION_TEXT = (
    f"epochseries {__version__}\n"
    "Deterministic, evenly spaced sequences of time instants."
)

from epochseries.errors import EpochParseError, EpochSeriesError, InvalidStepError  # noqa: E402
from epochseries.primitives import parse_duration, parse_epoch  # noqa: E402
from epochseries.series import (  # noqa: E402
    TimeSeries,
    approximate_len,
    epoch_array,
    epoch_index,
    exact_count,
)

__all__ = [
    "TimeSeries",
    "exact_count",
    "approximate_len",
    "epoch_array",
    "epoch_index",
    "parse_epoch",
    "parse_duration",
    "EpochSeriesError",
    "InvalidStepError",
    "EpochParseError",
]
