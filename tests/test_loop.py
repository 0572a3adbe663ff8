"""
Tests for the Watch/Commit Loop.

Requires Python 3.11+.
"""

import threading
from pathlib import Path

import pytest

from svnwatch.loop import WatchCommitLoop
from svnwatch.message import CommitMessage
from svnwatch.models import WatchConfig
from svnwatch.watcher.inotify import WatchOutcome
from tests.fakes import FakeVcs, FakeWatcher


def svn_line(code: str, path: str) -> str:
    """One status line in svn's column layout."""
    return f"{code:<8}{path}"


class TestWatchCommitLoop:
    """Test cases for WatchCommitLoop."""

    @pytest.fixture
    def config(self) -> WatchConfig:
        return WatchConfig(debounce_seconds=0, message_template="auto %d", date_format="%Y")

    def make_loop(self, config, vcs, watcher=None, clock=None) -> WatchCommitLoop:
        message = None
        if clock is not None:
            message = CommitMessage(config.message_template, config.date_format, clock=clock)
        return WatchCommitLoop(config, vcs, watcher or FakeWatcher(), message=message)

    def test_empty_status_issues_nothing(self, config: WatchConfig, fake_vcs: FakeVcs):
        """Test that a clean working copy produces no staging or commit."""
        loop = self.make_loop(config, fake_vcs)

        assert loop.run_once() is False
        assert fake_vcs.ops() == ["status"]

    def test_modified_only_goes_straight_to_commit(self, config: WatchConfig, working_copy: Path, fixed_clock):
        """Test that modified files need no add or delete."""
        vcs = FakeVcs(working_copy, statuses=[svn_line("M", "a.txt")])
        loop = self.make_loop(config, vcs, clock=fixed_clock)

        assert loop.run_once() is True
        assert vcs.ops() == ["status", "update", "commit"]
        assert vcs.calls[-1] == ("commit", "auto 2024")

    def test_untracked_and_missing(self, config: WatchConfig, working_copy: Path, fixed_clock):
        """Test one delete for the missing file and one add for the new one."""
        status = "\n".join([svn_line("?", "b.txt"), svn_line("!", "c.txt")])
        vcs = FakeVcs(working_copy, statuses=[status])
        loop = self.make_loop(config, vcs, clock=fixed_clock)

        loop.run_once()

        assert vcs.calls == [
            ("status",),
            ("delete", "c.txt"),
            ("add", "b.txt"),
            ("update",),
            ("commit", "auto 2024"),
        ]

    def test_deleted_line_yields_single_delete(self, config: WatchConfig, working_copy: Path):
        """Test that a deleted entry is removed and never added."""
        vcs = FakeVcs(working_copy, statuses=[svn_line("D", "old.txt")])
        self.make_loop(config, vcs).run_once()

        assert vcs.calls.count(("delete", "old.txt")) == 1
        assert "add" not in vcs.ops()

    def test_untracked_line_yields_single_add(self, config: WatchConfig, working_copy: Path):
        """Test that an untracked entry is added and never deleted."""
        vcs = FakeVcs(working_copy, statuses=[svn_line("?", "new.txt")])
        self.make_loop(config, vcs).run_once()

        assert vcs.calls.count(("add", "new.txt")) == 1
        assert "delete" not in vcs.ops()

    def test_failures_do_not_stop_the_loop(self, config: WatchConfig, working_copy: Path):
        """Test that failed commands are tolerated and the loop keeps going."""
        statuses = [svn_line("?", "b.txt"), svn_line("M", "a.txt")]
        vcs = FakeVcs(working_copy, statuses=statuses, failing={"add", "update", "commit"})
        loop = self.make_loop(config, vcs)

        assert loop.run(max_iterations=2) == 2
        assert vcs.ops() == ["status", "add", "update", "commit", "status", "update", "commit"]

    def test_timeout_and_watcher_failure_still_query_status(self, config: WatchConfig, fake_vcs: FakeVcs):
        """Test that a timed-out or failed wait is treated like an event."""
        watcher = FakeWatcher([WatchOutcome.TIMEOUT, WatchOutcome.FAILED])
        loop = self.make_loop(config, fake_vcs, watcher)

        loop.run(max_iterations=2)

        assert fake_vcs.ops() == ["status", "status"]

    def test_static_message_is_reused(self, working_copy: Path):
        """Test that a template without the token is committed verbatim."""
        config = WatchConfig(debounce_seconds=0, message_template="nightly save", date_format="%S")
        vcs = FakeVcs(working_copy, statuses=[svn_line("M", "a.txt")] * 3)
        loop = self.make_loop(config, vcs)

        loop.run(max_iterations=3)

        commits = [call for call in vcs.calls if call[0] == "commit"]
        assert commits == [("commit", "nightly save")] * 3

    def test_cancelled_wait_skips_iteration(self, config: WatchConfig, fake_vcs: FakeVcs):
        """Test that a stop during the wait leaves the working copy alone."""
        loop = self.make_loop(config, fake_vcs, FakeWatcher(stop_after=0))

        assert loop.run() == 1
        assert loop.stopped
        assert fake_vcs.calls == []

    def test_run_until_stopped(self, config: WatchConfig, fake_vcs: FakeVcs):
        """Test that the loop runs until the stop event is set."""
        watcher = FakeWatcher(stop_after=3)
        loop = self.make_loop(config, fake_vcs, watcher)

        iterations = loop.run()

        assert iterations == 4
        assert fake_vcs.ops() == ["status"] * 3

    def test_stop_before_run(self, config: WatchConfig, fake_vcs: FakeVcs):
        """Test that a loop stopped up front never waits."""
        watcher = FakeWatcher()
        loop = self.make_loop(config, fake_vcs, watcher)
        loop.stop()

        assert loop.run() == 0
        assert watcher.waits == 0

    def test_stop_during_debounce(self, fake_vcs: FakeVcs):
        """Test that cancelling while settling skips the status query."""
        stop = threading.Event()
        config = WatchConfig(debounce_seconds=30)

        class StoppingWatcher:
            def wait(self, stop_event=None):
                threading.Timer(0.05, stop.set).start()
                return WatchOutcome.EVENT

        loop = WatchCommitLoop(config, fake_vcs, StoppingWatcher(), stop=stop)

        assert loop.run_once() is False
        assert fake_vcs.calls == []

    def test_unusable_debounce_does_not_stop_the_loop(self, working_copy: Path):
        """Test that a non-numeric delay skips the wait and still commits."""
        config = WatchConfig(debounce_seconds="soon", message_template="msg")
        vcs = FakeVcs(working_copy, statuses=[svn_line("M", "a.txt")] * 2)
        loop = self.make_loop(config, vcs)

        assert loop.run(max_iterations=2) == 2
        assert vcs.ops() == ["status", "update", "commit"] * 2
