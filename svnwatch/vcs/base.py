"""
svnwatch VCS Adapter Interface.

The watch loop talks to version control only through this interface,
so the client can be swapped or faked in tests.
Requires Python 3.11+.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from svnwatch.errors import NotAWorkingCopyError
from svnwatch.models import Changeset
from svnwatch.utils.logger import get_logger
from svnwatch.utils.process import CommandResult

logger = get_logger(__name__)


class VersionControl(Protocol):
    """Operations the watch loop needs from a working copy."""

    working_dir: Path

    def list_changes(self) -> Changeset:
        """Query status and return the parsed entries."""
        ...

    def add(self, path: str) -> CommandResult:
        """Stage a path for addition."""
        ...

    def delete(self, path: str) -> CommandResult:
        """Stage a path for removal."""
        ...

    def update(self) -> CommandResult:
        """Merge upstream changes into the working copy."""
        ...

    def commit(self, message: str) -> CommandResult:
        """Commit staged and modified paths."""
        ...


# Answers "is the adapter's working directory inside a working copy"
WorkingCopyPredicate = Callable[[VersionControl], bool]


def ensure_working_copy(vcs: VersionControl, predicate: WorkingCopyPredicate) -> None:
    """
    Confirm the operating directory belongs to a working copy.

    Raises:
        NotAWorkingCopyError: if the predicate says it does not
    """
    if not predicate(vcs):
        logger.error("not_a_working_copy", path=str(vcs.working_dir))
        raise NotAWorkingCopyError("Target is not in a svn working dir")
    logger.debug("working_copy_confirmed", path=str(vcs.working_dir))
