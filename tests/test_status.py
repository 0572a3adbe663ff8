"""
Tests for the svn status parser.

Requires Python 3.11+.
"""

from svnwatch.models import StatusEntry, StatusKind
from svnwatch.vcs.status import parse_status, parse_status_line

STATUS_OUTPUT = """\
M       a.txt
?       b.txt
!       c.txt
D       docs/old.md
A  +    copied.txt
R       replaced.bin
?       name with  two spaces.txt

Performing status on external item at 'vendor/lib':
X       vendor/lib
"""


class TestParseStatus:
    """Test cases for parse_status."""

    def test_full_output(self):
        entries = parse_status(STATUS_OUTPUT)

        assert entries == [
            StatusEntry(StatusKind.MODIFIED, "a.txt"),
            StatusEntry(StatusKind.UNTRACKED, "b.txt"),
            StatusEntry(StatusKind.MISSING, "c.txt"),
            StatusEntry(StatusKind.DELETED, "docs/old.md"),
            StatusEntry(StatusKind.ADDED, "copied.txt"),
            StatusEntry(StatusKind.REPLACED, "replaced.bin"),
            StatusEntry(StatusKind.UNTRACKED, "name with  two spaces.txt"),
            StatusEntry(StatusKind.EXTERNAL, "vendor/lib"),
        ]

    def test_empty_output(self):
        assert parse_status("") == []
        assert parse_status("\n\n") == []

    def test_short_line(self):
        """Test lines without the full flag columns."""
        assert parse_status_line("? b.txt") == StatusEntry(StatusKind.UNTRACKED, "b.txt")

    def test_tree_conflict_detail_is_skipped(self):
        assert parse_status_line("        >   local file edit, incoming file delete") is None

    def test_malformed_line_is_skipped(self):
        assert parse_status_line("Summary of conflicts:") is None
        assert parse_status_line("?") is None

    def test_unknown_code(self):
        entry = parse_status_line("Z       weird.txt")

        assert entry == StatusEntry(StatusKind.OTHER, "weird.txt")
