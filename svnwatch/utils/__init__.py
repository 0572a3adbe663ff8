"""
svnwatch Utilities Package.

Common utilities shared across all svnwatch modules.
Requires Python 3.11+.
"""

from svnwatch.utils.config import Settings, get_settings
from svnwatch.utils.logger import configure_logging, get_logger, logger, LoggerMixin
from svnwatch.utils.process import CommandResult, run_command

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "logger",
    "LoggerMixin",
    "CommandResult",
    "run_command",
]
