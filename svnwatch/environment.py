"""
svnwatch Environment Prober.

Resolves and checks the external programs once at startup.
Requires Python 3.11+.
"""

import shutil
from dataclasses import dataclass

from svnwatch.errors import MissingBinaryError
from svnwatch.utils.config import BinarySettings
from svnwatch.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Binaries:
    """Executable names for the VCS client and the event watcher."""

    svn: str
    inotifywait: str


def is_command(name: str) -> bool:
    """Check if a program by this name exists on the search path."""
    return shutil.which(name) is not None


def probe_environment(settings: BinarySettings) -> Binaries:
    """
    Resolve both executable names and verify they can be invoked.

    Args:
        settings: Binary names, already defaulted or overridden from the environment

    Returns:
        Binaries with the names to invoke

    Raises:
        MissingBinaryError: for the first program that cannot be found
    """
    binaries = Binaries(svn=settings.svn_bin, inotifywait=settings.inw_bin)

    for name in (binaries.svn, binaries.inotifywait):
        if not is_command(name):
            logger.error("required_command_missing", command=name)
            raise MissingBinaryError(name)

    logger.debug("environment_probed", svn=binaries.svn, inotifywait=binaries.inotifywait)
    return binaries
