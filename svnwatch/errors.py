"""
svnwatch Errors.

Fatal startup errors. Anything raised from here ends the process
before the watch loop starts.
Requires Python 3.11+.
"""


class SvnWatchError(Exception):
    """Base class for fatal svnwatch errors."""


class MissingBinaryError(SvnWatchError):
    """Raised when a required external program is not on the search path."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required command '{name}' not found.")
        self.name = name


class TargetResolutionError(SvnWatchError):
    """Raised when the watch target is neither a regular file nor a directory."""


class NotAWorkingCopyError(SvnWatchError):
    """Raised when the operating directory is not inside a working copy."""
