"""
svnwatch Process Runner.

Thin wrapper around subprocess for the external programs svnwatch drives.
Failures are returned as values, never raised.
Requires Python 3.11+.
"""

import shlex
import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

# Exit code reported when the program could not be started at all
LAUNCH_FAILED = 127

REDACTED = "******"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    command: str
    code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Check if the command exited successfully."""
        return self.code == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


def printable(text: str) -> str:
    """Replace surrogate-escaped bytes with backslash escapes for display."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def format_command(argv: Sequence[str], secrets: Iterable[str] = ()) -> str:
    """Render argv as a shell command line with secrets masked."""
    hidden = {s for s in secrets if s}
    return printable(shlex.join(REDACTED if arg in hidden else arg for arg in argv))


def run_command(
    argv: Sequence[str],
    cwd: Path | str | None = None,
    secrets: Iterable[str] = (),
) -> CommandResult:
    """
    Run a command to completion and capture its output.

    Undecodable output bytes are kept as surrogate escapes, so paths read
    from the output can be passed back to the program unchanged.

    Args:
        argv: Program and arguments
        cwd: Working directory for the command
        secrets: Argument values to mask in the recorded command line

    Returns:
        CommandResult; a program that cannot be launched yields code 127
    """
    command = format_command(argv, secrets)
    try:
        proc = subprocess.run(
            list(argv),
            cwd=cwd,
            text=True,
            errors="surrogateescape",
            capture_output=True,
            check=False,
        )
    except OSError as e:
        return CommandResult(command, LAUNCH_FAILED, "", str(e))
    return CommandResult(command, proc.returncode, proc.stdout, proc.stderr)
