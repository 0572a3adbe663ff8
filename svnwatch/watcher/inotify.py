"""
svnwatch inotifywait Adapter.

Runs one inotifywait invocation per loop iteration and blocks until it
reports an event, times out, fails or is cancelled.
Requires Python 3.11+.
"""

import subprocess
import threading
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from svnwatch.utils.logger import LoggerMixin
from svnwatch.utils.process import format_command, printable

# inotifywait exit statuses
EXIT_EVENT = 0
EXIT_TIMEOUT = 2


class WatchOutcome(str, Enum):
    """How a single wait ended."""

    EVENT = "event"
    TIMEOUT = "timeout"
    FAILED = "failed"
    CANCELLED = "cancelled"


class InotifyWatcher(LoggerMixin):
    """
    Blocking wait on an inotifywait command line.

    The loop treats every outcome except CANCELLED the same way: a
    timeout or a watcher error still leads to a status query.
    """

    def __init__(
        self,
        command: Sequence[str],
        poll_interval: float = 0.5,
        popen: Callable[..., Any] = subprocess.Popen,
    ) -> None:
        """
        Initialize the watcher.

        Args:
            command: Full inotifywait argv
            poll_interval: Seconds between cancellation checks
            popen: Process factory, replaceable in tests
        """
        self.command = tuple(command)
        self._poll_interval = poll_interval
        self._popen = popen

    def wait(self, stop: threading.Event | None = None) -> WatchOutcome:
        """
        Block until the watcher process exits.

        Args:
            stop: When set, the watcher process is terminated

        Returns:
            WatchOutcome describing how the wait ended
        """
        try:
            proc = self._popen(
                list(self.command),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="surrogateescape",
            )
        except OSError as e:
            self.log.warning(
                "watcher_failed",
                command=format_command(self.command),
                error=str(e),
            )
            return WatchOutcome.FAILED

        while True:
            try:
                _, stderr = proc.communicate(timeout=self._poll_interval)
                break
            except subprocess.TimeoutExpired:
                if stop is not None and stop.is_set():
                    proc.terminate()
                    proc.communicate()
                    self.log.debug("watcher_cancelled")
                    return WatchOutcome.CANCELLED

        code = proc.returncode
        if code == EXIT_EVENT:
            self.log.debug("watcher_event")
            return WatchOutcome.EVENT
        if code == EXIT_TIMEOUT:
            self.log.debug("watcher_timeout")
            return WatchOutcome.TIMEOUT
        # Interrupted together with us by the same signal
        if stop is not None and stop.is_set():
            return WatchOutcome.CANCELLED

        self.log.warning(
            "watcher_failed",
            command=format_command(self.command),
            code=code,
            stderr=printable((stderr or "").strip()),
        )
        return WatchOutcome.FAILED
