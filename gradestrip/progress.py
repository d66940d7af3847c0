"""Periodic progress reporting with a cooperative yield point."""

# Module responsibilities:
# - Turn "records processed" into integer percentages for a caller-supplied callback.
# - Hand control back to the host after every reported step via an injectable yield function.

from __future__ import annotations

import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Iterator, Optional, TypeVar

from .utils.log import get_logger

logger = get_logger("progress")

ProgressCallback = Callable[[int], None]
T = TypeVar("T")

DEFAULT_REPORT_EVERY = 20


def _yield_to_host() -> None:
    time.sleep(0)


def percent_of(processed: int, total: int) -> int:
    """``round(100 * processed / total)`` with halves rounded up, clamped to 0..100."""

    if total <= 0:
        return 100
    value = (Decimal(100) * processed / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(value)))


class ProgressReporter:
    """Wrap a record loop, reporting every ``every`` records and once at 100 on completion.

    ``finish()`` is only reached on the normal completion path; a loop body that
    raises leaves the final 100 unreported.
    """

    def __init__(
        self,
        total: int,
        callback: Optional[ProgressCallback] = None,
        *,
        every: int = DEFAULT_REPORT_EVERY,
        yield_control: Callable[[], None] = _yield_to_host,
    ) -> None:
        self.total = max(0, total)
        self.callback = callback
        self.every = max(1, every)
        self.yield_control = yield_control
        self.processed = 0
        self.last_percent = 0
        self.finished = False

    def _emit(self, percent: int) -> None:
        percent = max(percent, self.last_percent)
        self.last_percent = percent
        if self.callback is not None:
            self.callback(percent)

    def advance(self) -> None:
        """Record one processed item; report and yield on every ``every``-th item.

        In-loop reports stay below 100 so completion is reported exactly once.
        """

        self.processed += 1
        if self.processed % self.every != 0:
            return
        # 100 belongs to finish() alone
        if self.processed < self.total:
            self._emit(min(99, percent_of(self.processed, self.total)))
        self.yield_control()

    def finish(self) -> None:
        if self.finished:
            return
        self.finished = True
        self._emit(100)
        logger.debug("Progress complete", extra={"processed": self.processed, "total": self.total})

    def iterate(self, items: Iterable[T]) -> Iterator[T]:
        """Yield ``items`` one by one, advancing after each and finishing once exhausted."""

        for item in items:
            yield item
            self.advance()
        self.finish()


__all__ = ["DEFAULT_REPORT_EVERY", "ProgressCallback", "ProgressReporter", "percent_of"]
