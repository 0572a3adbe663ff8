"""
svnwatch Watch/Commit Loop.

Waits for filesystem events, lets them settle, then stages and commits
whatever the working copy reports as changed.
Requires Python 3.11+.
"""

import threading
from typing import Protocol

from svnwatch.message import CommitMessage
from svnwatch.models import WatchConfig
from svnwatch.utils.logger import LoggerMixin
from svnwatch.vcs.base import VersionControl
from svnwatch.watcher.debouncer import Debouncer
from svnwatch.watcher.inotify import WatchOutcome


class Watcher(Protocol):
    """Blocking "wait for the next batch of events" primitive."""

    def wait(self, stop: threading.Event | None = None) -> WatchOutcome:
        ...


class WatchCommitLoop(LoggerMixin):
    """
    The svnwatch main loop.

    No command failure stops the loop; failures are logged by the VCS
    adapter and the next iteration starts as usual. The loop only ends
    when the stop event is set or an iteration limit is reached. Once
    staging has begun an iteration always runs through to the commit.
    """

    def __init__(
        self,
        config: WatchConfig,
        vcs: VersionControl,
        watcher: Watcher,
        stop: threading.Event | None = None,
        message: CommitMessage | None = None,
        debouncer: Debouncer | None = None,
    ) -> None:
        """
        Initialize the loop.

        Args:
            config: Frozen run configuration
            vcs: Working copy adapter
            watcher: Event watcher for the resolved target
            stop: Cancellation signal; a private one is created if omitted
            message: Commit message renderer, built from config if omitted
            debouncer: Debouncer, built from config if omitted
        """
        self._config = config
        self._vcs = vcs
        self._watcher = watcher
        self._stop = stop if stop is not None else threading.Event()
        self._message = message or CommitMessage(config.message_template, config.date_format)
        self._debouncer = debouncer or Debouncer(config.debounce_seconds)

    @property
    def config(self) -> WatchConfig:
        return self._config

    @property
    def stopped(self) -> bool:
        """Check if a stop was requested."""
        return self._stop.is_set()

    def stop(self) -> None:
        """Request the loop to stop at the next step boundary."""
        self._stop.set()

    def run_once(self) -> bool:
        """
        Run one wait/debounce/stage/commit cycle.

        Returns:
            True if a commit was attempted and succeeded
        """
        outcome = self._watcher.wait(self._stop)
        if outcome is WatchOutcome.CANCELLED or self.stopped:
            return False

        if not self._debouncer.settle(self._stop):
            return False

        message = self._message.render()

        changes = self._vcs.list_changes()
        if changes.is_empty:
            self.log.debug("no_changes", trigger=outcome.value)
            return False

        to_delete = changes.to_delete
        to_add = changes.to_add
        self.log.info(
            "changes_detected",
            trigger=outcome.value,
            entries=len(changes),
            deleting=len(to_delete),
            adding=len(to_add),
        )

        for path in to_delete:
            self._vcs.delete(path)

        for path in to_add:
            self._vcs.add(path)

        self._vcs.update()
        result = self._vcs.commit(message)
        if result.ok:
            self.log.info("committed", message=message)
        return result.ok

    def run(self, max_iterations: int | None = None) -> int:
        """
        Loop until stopped.

        Args:
            max_iterations: Stop after this many cycles (None runs forever)

        Returns:
            Number of cycles run
        """
        self.log.info(
            "watch_loop_started",
            working_dir=str(self._vcs.working_dir),
            debounce_seconds=self._config.debounce_seconds,
        )

        iterations = 0
        while not self.stopped:
            if max_iterations is not None and iterations >= max_iterations:
                break
            self.run_once()
            iterations += 1

        self.log.info("watch_loop_stopped", iterations=iterations)
        return iterations
