"""
svnwatch Status Parser.

Parses `svn status` output. Each line carries a one-character change
code, six more flag columns, a space and the path.
Requires Python 3.11+.
"""

from svnwatch.models import StatusEntry, StatusKind
from svnwatch.utils.logger import get_logger
from svnwatch.utils.process import printable

logger = get_logger(__name__)

# Characters that may appear in flag columns 2 to 7
_FLAG_CHARS = frozenset(" CMLS+XKOTB")
_PATH_COLUMN = 8


def parse_status_line(line: str) -> StatusEntry | None:
    """
    Parse one status line.

    Returns:
        StatusEntry, or None for blank, detail and malformed lines
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    # Code must be followed by whitespace
    if len(line) < 3 or not line[1].isspace():
        logger.debug("malformed_status_line", line=printable(line))
        return None

    flags = line[1:_PATH_COLUMN - 1]
    if (
        len(line) > _PATH_COLUMN
        and line[_PATH_COLUMN - 1] == " "
        and set(flags) <= _FLAG_CHARS
    ):
        path = line[_PATH_COLUMN:]
    else:
        path = line[1:].strip()

    # Tree-conflict details ("> moved to ...") follow their entry
    if not path or path.startswith(">"):
        return None

    return StatusEntry(kind=StatusKind.from_code(line[0]), path=path)


def parse_status(output: str) -> list[StatusEntry]:
    """Parse full status output into entries, in report order."""
    entries = []
    for line in output.splitlines():
        entry = parse_status_line(line)
        if entry is not None:
            entries.append(entry)
    return entries
