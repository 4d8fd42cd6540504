"""
Evenly spaced epoch sequences: iterator, counting and materialization.
"""
from epochseries.series.length import approximate_len, exact_count
from epochseries.series.schedule import epoch_array, epoch_index
from epochseries.series.time_series import TimeSeries, check_step

__all__ = [
    "TimeSeries",
    "check_step",
    "exact_count",
    "approximate_len",
    "epoch_array",
    "epoch_index",
]
