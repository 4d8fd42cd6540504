"""
Evenly spaced epoch iterator.

A ``TimeSeries`` walks from ``start`` towards ``end`` by a fixed ``step``.
Every element is ``start + k * step`` computed by repeated exact addition on
the underlying instant type, so no floating point drift is introduced here.
"""
import copy
import logging
from typing import Any, Iterator, Optional, Tuple

from epochseries.config import get_config
from epochseries.errors import InvalidStepError
from epochseries.primitives import EPOCH_OVERFLOW_ERRORS, duration_sign
from epochseries.series.length import exact_count

logger = logging.getLogger(__name__)


def check_step(start: Any, end: Any, step: Any) -> int:
    """
    Validate that ``step`` can walk from ``start`` to ``end``.

    Returns:
        Direction of the walk (1 forward in time, -1 backward)

    Raises:
        InvalidStepError: zero or non-finite step, non-finite range, or a step
            pointing away from ``end``
    """
    step_sign = duration_sign(step)
    span_sign = duration_sign(end - start)

    if span_sign is None:
        raise InvalidStepError(f"Range {start} .. {end} is not finite")
    if step_sign is None:
        raise InvalidStepError(f"Step {step} is not finite")
    if step_sign == 0:
        raise InvalidStepError("Step must be non-zero")
    if span_sign != 0 and span_sign != step_sign:
        raise InvalidStepError(f"Step {step} points away from end {end} (start {start})")
    return step_sign


class TimeSeries:
    """
    Iterator of evenly spaced epochs.

    Always inclusive on ``start``. Exclusive series stop before ``end``;
    inclusive series also produce ``end`` when it is an exact multiple of
    ``step`` away from ``start``.

    The series is a cursor, not a range: iterating consumes it. Forward
    (``next``) and backward (``next_back``) stepping may be mixed; the two
    cursors meet in the middle and every element is produced once.

    Example:
        start = parse_epoch("2017-01-14T00:00:00 UTC")
        end = parse_epoch("2017-01-14T12:00:00 UTC")
        for epoch in TimeSeries.exclusive(start, end, pd.Timedelta(hours=2)):
            print(epoch)  # 00:00, 02:00, ... 10:00
    """

    def __init__(
        self,
        start: Any,
        end: Any,
        step: Any,
        inclusive: bool,
        validate_step: Optional[bool] = None,
    ):
        """
        Initialize a time series.

        Args:
            start: First epoch produced
            end: Boundary epoch
            step: Fixed advance between epochs
            inclusive: Whether ``end`` itself may be produced
            validate_step: Raise on degenerate steps (defaults to config)
        """
        self._start = start
        self._end = end
        self._step = step
        self._incl = bool(inclusive)
        # One step before start so that the first forward step lands on it;
        # None when that instant is not representable
        self._cur = self._shift(start, -1)
        # Next element to produce from the back; computed on first use
        self._tail = None
        self._tail_ready = False
        # Earliest element produced from the back; bounds the forward cursor
        self._back = None
        self._degenerate = False

        if validate_step is None:
            validate_step = get_config().validate_step

        try:
            self._direction = check_step(start, end, step)
        except InvalidStepError as e:
            if validate_step:
                raise
            logger.warning(f"Degenerate time series produces nothing: {e}")
            self._degenerate = True
            self._direction = 1

        logger.debug(f"Created {self!r}")

    @classmethod
    def exclusive(cls, start: Any, end: Any, step: Any) -> "TimeSeries":
        """Evenly spaced epochs, inclusive on start and **exclusive** on end."""
        return cls(start, end, step, inclusive=False)

    @classmethod
    def inclusive(cls, start: Any, end: Any, step: Any) -> "TimeSeries":
        """Evenly spaced epochs, inclusive on start **and** on end."""
        return cls(start, end, step, inclusive=True)

    @property
    def start(self) -> Any:
        return self._start

    @property
    def end(self) -> Any:
        return self._end

    @property
    def step(self) -> Any:
        return self._step

    @property
    def is_inclusive(self) -> bool:
        return self._incl

    @property
    def cursor(self) -> Any:
        """
        Last epoch produced going forward.

        ``start - step`` before the first, or None if that lies outside the
        range of the epoch type.
        """
        return self._cur

    def _shift(self, epoch: Any, steps: int) -> Optional[Any]:
        """``epoch + steps * step``, or None when it leaves the epoch type's range."""
        try:
            if steps == 1:
                return epoch + self._step
            if steps == -1:
                return epoch - self._step
            return epoch + self._step * steps
        except EPOCH_OVERFLOW_ERRORS:
            return None

    def _precedes(self, a: Any, b: Any) -> bool:
        if self._direction > 0:
            return a < b
        return a > b

    def _within_end(self, epoch: Any) -> bool:
        if self._incl:
            return not self._precedes(self._end, epoch)
        return self._precedes(epoch, self._end)

    def _after_cursor(self, epoch: Any) -> bool:
        return self._cur is None or self._precedes(self._cur, epoch)

    def _first_pending(self) -> Optional[Any]:
        if self._cur is None:
            return self._start
        return self._shift(self._cur, 1)

    def __iter__(self) -> "TimeSeries":
        return self

    def __next__(self) -> Any:
        item = self.next()
        if item is None:
            raise StopIteration
        return item

    def next(self) -> Optional[Any]:
        """
        Advance the forward cursor by one step.

        Returns:
            The next epoch, or None once the end (or the backward cursor) is reached
        """
        if self._degenerate:
            return None

        candidate = self._first_pending()
        if candidate is None or not self._within_end(candidate):
            return None
        if self._back is not None and not self._precedes(candidate, self._back):
            return None

        self._cur = candidate
        return candidate

    def _last_element(self) -> Optional[Any]:
        total = exact_count(self._start, self._end, self._step, self._incl)
        if total == 0:
            return None

        last = self._shift(self._start, total - 1)
        if last is None:
            return None

        # Seconds-based counts may be off by one; settle on the exact boundary.
        while self._precedes(self._start, last) and not self._within_end(last):
            last = self._shift(last, -1)
        following = self._shift(last, 1)
        while following is not None and self._within_end(following):
            last = following
            following = self._shift(last, 1)

        if not self._within_end(last):
            return None
        return last

    def next_back(self) -> Optional[Any]:
        """
        Step the backward cursor by one step.

        Returns:
            The last epoch not yet produced, or None once ``start`` (or the
            forward cursor) is passed
        """
        if self._degenerate:
            return None
        if not self._tail_ready:
            self._tail = self._last_element()
            self._tail_ready = True

        candidate = self._tail
        if candidate is None or self._precedes(candidate, self._start):
            return None
        if not self._after_cursor(candidate):
            return None

        self._back = candidate
        self._tail = self._shift(candidate, -1)
        return candidate

    def __reversed__(self) -> Iterator[Any]:
        while True:
            item = self.next_back()
            if item is None:
                return
            yield item

    def _remaining(self, max_count: Optional[int]) -> int:
        if self._degenerate:
            return 0

        first = self._first_pending()
        if first is None:
            return 0
        if self._back is None:
            return exact_count(first, self._end, self._step, self._incl, max_count)
        return exact_count(first, self._back, self._step, False, max_count)

    def __len__(self) -> int:
        return self._remaining(get_config().max_count)

    def size_hint(self) -> Tuple[int, int]:
        """Lower bound (exact remaining count) and upper bound (one more)."""
        remaining = len(self)
        return remaining, remaining + 1

    def total_len(self) -> int:
        """Element count of the full series, independent of the cursors."""
        if self._degenerate:
            return 0
        return exact_count(self._start, self._end, self._step, self._incl, get_config().max_count)

    def copy(self) -> "TimeSeries":
        """Independent series with the same bounds and cursor positions."""
        return copy.copy(self)

    def __repr__(self) -> str:
        mode = "inclusive" if self._incl else "exclusive"
        return f"TimeSeries(start={self._start}, end={self._end}, step={self._step}, {mode})"
