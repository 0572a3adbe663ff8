"""
svnwatch Target Resolver.

Classifies the watch target and derives the operating directory,
the watcher invocation and the path to stage additions with.
Requires Python 3.11+.
"""

import os
from pathlib import Path

from svnwatch.errors import TargetResolutionError
from svnwatch.models import ResolvedTarget
from svnwatch.utils.logger import get_logger

logger = get_logger(__name__)

# Anything inside a .svn metadata directory
VCS_METADATA_EXCLUDE = r"(^|/)\.svn(/|$)"

DIRECTORY_EVENTS = "close_write,move,delete,create"
# A watched file cannot be created again while it exists
FILE_EVENTS = "close_write,move,delete"


def directory_watch_command(watcher: str, directory: Path, timeout: int) -> tuple[str, ...]:
    """Recursive watch of a directory, ignoring VCS metadata."""
    return (
        watcher,
        "-qq",
        "-r",
        "-t", str(timeout),
        "--exclude", VCS_METADATA_EXCLUDE,
        "-e", DIRECTORY_EVENTS,
        str(directory),
    )


def file_watch_command(watcher: str, file_path: Path, timeout: int) -> tuple[str, ...]:
    """Non-recursive watch of a single file."""
    return (
        watcher,
        "-qq",
        "-t", str(timeout),
        "-e", FILE_EVENTS,
        str(file_path),
    )


def resolve_target(target: str | Path, watcher: str, timeout: int) -> ResolvedTarget:
    """
    Resolve a watch target.

    Args:
        target: File or directory given on the command line
        watcher: inotifywait executable name
        timeout: Seconds the watcher waits before returning anyway

    Returns:
        ResolvedTarget describing how to watch and stage the target

    Raises:
        TargetResolutionError: if the target is neither a file nor a directory
    """
    path = Path(os.path.realpath(target))

    if path.is_dir():
        # realpath drops trailing separators; "/" stays as is
        working_dir = Path(str(path).rstrip(os.sep) or os.sep)
        resolved = ResolvedTarget(
            path=path,
            is_directory=True,
            working_dir=working_dir,
            watch_command=directory_watch_command(watcher, working_dir, timeout),
            add_argument=".",
        )
    elif path.is_file():
        resolved = ResolvedTarget(
            path=path,
            is_directory=False,
            working_dir=path.parent,
            watch_command=file_watch_command(watcher, path, timeout),
            add_argument=str(path),
        )
    else:
        logger.error("target_unresolvable", target=str(target))
        raise TargetResolutionError("The target is neither a regular file nor a directory.")

    logger.info(
        "target_resolved",
        path=str(resolved.path),
        directory=resolved.is_directory,
        working_dir=str(resolved.working_dir),
    )
    return resolved
