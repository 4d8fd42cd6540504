"""
Exception types raised by epochseries.
"""


class EpochSeriesError(Exception):
    """Base class for epochseries errors."""


class InvalidStepError(EpochSeriesError, ValueError):
    """
    Raised when a step cannot walk from start to end.

    Covers a zero step, a non-finite step and a step whose sign points away
    from the end boundary.
    """


class EpochParseError(EpochSeriesError, ValueError):
    """Raised for epoch or duration text that cannot be parsed."""
