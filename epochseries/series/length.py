"""
Element counts for evenly spaced epoch sequences.

Counts are computed from exact integer ticks whenever both the span and the
step expose them. Real-valued division of seconds is only used as a fallback,
since the ratio of two rounded second counts can land on the wrong side of an
integer and the ceiling/floor choice misses the end element of inclusive series.
"""
import logging
import math
import sys
from typing import Any, Optional

from epochseries.primitives import duration_ticks, in_seconds

logger = logging.getLogger(__name__)


def _clamp(count: int, max_count: Optional[int]) -> int:
    if max_count is not None and count > max_count:
        logger.warning(f"Series length {count} clamped to {max_count}")
        return max_count
    return count


def tick_count(span: int, step: int, inclusive: bool) -> int:
    """Element count for a span and step given as integer ticks."""
    if step == 0:
        return 0
    if step < 0:
        span, step = -span, -step
    if span < 0:
        return 0
    if span == 0:
        return 1 if inclusive else 0

    whole, remainder = divmod(span, step)
    if inclusive:
        return whole + 1
    return whole + (1 if remainder else 0)


def _seconds_count(span: float, step: float, inclusive: bool, max_count: Optional[int]) -> int:
    if not (math.isfinite(span) and math.isfinite(step)) or step == 0.0:
        return 0

    ratio = span / step
    if ratio < 0.0:
        return 0
    if not math.isfinite(ratio):
        return max_count if max_count is not None else sys.maxsize

    if inclusive:
        return math.floor(ratio) + 1
    return math.ceil(ratio)


def exact_count(
    start: Any,
    end: Any,
    step: Any,
    inclusive: bool,
    max_count: Optional[int] = None,
) -> int:
    """
    Number of elements ``start + k * step`` (k >= 0) before ``end``.

    Args:
        start: First instant of the sequence
        end: Boundary instant
        step: Advance between elements
        inclusive: Whether an element equal to ``end`` counts
        max_count: Clamp for the result (None for no clamp)

    Returns:
        Element count; 0 when ``end`` lies behind ``start`` in the step direction
    """
    span = end - start
    span_ticks = duration_ticks(span)
    step_ticks = duration_ticks(step)

    if span_ticks is not None and step_ticks is not None:
        count = tick_count(span_ticks, step_ticks, inclusive)
    else:
        logger.debug(f"No integer ticks for {type(span).__name__}/{type(step).__name__}, counting in seconds")
        count = _seconds_count(in_seconds(span), in_seconds(step), inclusive, max_count)

    return _clamp(count, max_count)


def approximate_len(
    start: Any,
    end: Any,
    step: Any,
    inclusive: bool,
    max_count: int = sys.maxsize,
) -> int:
    """
    Seconds-ratio estimate: ceiling of ``|span / step|`` when inclusive, floor otherwise.

    Kept for callers that relied on the float estimate. It misses the end
    element of inclusive series that land exactly on ``end``. Use ``exact_count``
    for anything that must match enumeration.
    """
    span_seconds = in_seconds(end - start)
    step_seconds = in_seconds(step)
    if step_seconds == 0.0:
        approx = math.inf if span_seconds else math.nan
    else:
        approx = abs(span_seconds / step_seconds)

    if math.isnan(approx):
        return 0
    if math.isinf(approx):
        logger.warning(f"Unbounded series length clamped to {max_count}")
        return max_count

    rounded = math.ceil(approx) if inclusive else math.floor(approx)
    return _clamp(rounded, max_count)
