"""Tests for materializing series as numpy arrays and DatetimeIndex."""

from datetime import datetime, timedelta

import numpy as np
import pandas as pd
import pytest

from epochseries import InvalidStepError, TimeSeries, epoch_array, epoch_index, parse_epoch

START = parse_epoch("2017-01-14T00:00:00 UTC")
END = parse_epoch("2017-01-14T12:00:00 UTC")
TWO_HOURS = pd.Timedelta(hours=2)


def test_epoch_array_matches_expected_example():
    values = epoch_array(START, END, TWO_HOURS)

    assert values.dtype == np.dtype("datetime64[ns]")
    assert values.tolist()[0] == START.value
    hours = (values - values[0]) / np.timedelta64(1, "h")
    assert hours.tolist() == [0, 2, 4, 6, 8, 10]


def test_inclusive_epoch_array_ends_on_end():
    values = epoch_array(START, END, TWO_HOURS, inclusive=True)
    assert len(values) == 7
    assert values[-1] == np.datetime64(END.value, "ns")


@pytest.mark.parametrize("inclusive", [False, True])
def test_epoch_index_matches_iterator(inclusive):
    step = pd.Timedelta(minutes=37, nanoseconds=3)
    index = epoch_index(START, END, step, inclusive=inclusive)

    assert str(index.tz) == "UTC"
    assert list(index) == list(TimeSeries(START, END, step, inclusive=inclusive))


def test_epoch_index_keeps_start_timezone():
    start = START.tz_convert("Europe/Berlin")
    index = epoch_index(start, END, TWO_HOURS)

    assert str(index.tz) == "Europe/Berlin"
    assert index[0] == START
    assert index[0].hour == 1


def test_descending_epoch_array():
    values = epoch_array(END, START, -TWO_HOURS, inclusive=True)
    hours = (values - values[-1]) / np.timedelta64(1, "h")
    assert hours.tolist() == [12, 10, 8, 6, 4, 2, 0]


def test_empty_range_returns_empty_array():
    values = epoch_array(START, START, TWO_HOURS)
    assert values.size == 0
    assert values.dtype == np.dtype("datetime64[ns]")


def test_invalid_step_is_rejected():
    with pytest.raises(InvalidStepError):
        epoch_array(START, END, pd.Timedelta(0))
    with pytest.raises(InvalidStepError):
        epoch_array(START, END, -TWO_HOURS)


def test_range_beyond_nanosecond_epochs_is_rejected():
    with pytest.raises((OverflowError, ValueError)):
        epoch_array(datetime(2262, 1, 1), datetime(2300, 1, 1), timedelta(days=365))
