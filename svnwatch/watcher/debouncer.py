"""
svnwatch Debouncer.

Lets a burst of writes settle before the changes are committed.
Requires Python 3.11+.
"""

import math
import threading

from svnwatch.utils.logger import LoggerMixin


def _parse_delay(value: float | str) -> float | None:
    """Delay in seconds, or None when the value cannot be slept on."""
    try:
        delay = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(delay) or delay < 0:
        return None
    return delay


class Debouncer(LoggerMixin):
    """
    Waits a fixed delay after the watcher returns.

    Every event of a burst that lands within the delay ends up in the
    same commit. The wait ends early when the stop event is set. An
    unusable delay is reported on every settle and no wait happens.
    """

    def __init__(self, delay_seconds: float | str = 2.0) -> None:
        """
        Initialize the debouncer.

        Args:
            delay_seconds: Delay before the changes are processed, as given
                on the command line
        """
        self._raw_delay = delay_seconds
        self._delay = _parse_delay(delay_seconds)

    @property
    def delay(self) -> float | None:
        return self._delay

    def settle(self, stop: threading.Event | None = None) -> bool:
        """
        Wait out the debounce delay.

        Args:
            stop: Cancellation signal checked while waiting

        Returns:
            True if the delay elapsed (or was skipped), False if cancelled
        """
        event = stop if stop is not None else threading.Event()
        if self._delay is None:
            self.log.warning("debounce_invalid", delay=str(self._raw_delay))
            return not event.is_set()
        if event.wait(self._delay):
            self.log.debug("debounce_cancelled")
            return False
        return True
