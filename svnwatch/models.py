"""
svnwatch Data Models.

Configuration, resolved target and changeset structures shared by
the resolver, the VCS adapter and the watch loop.
Requires Python 3.11+.
"""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_DEBOUNCE_SECONDS = 2
WATCH_TIMEOUT_SECONDS = 300
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_TOKEN = "%d"
DEFAULT_MESSAGE_TEMPLATE = f"Scripted auto-commit on change ({DATE_TOKEN}) by svnwatch"


class WatchConfig(BaseModel):
    """
    Run configuration built once from the command line.

    Frozen: the loop reads it but never changes it.
    """

    model_config = ConfigDict(frozen=True)

    # Kept as given when not a number; the debouncer reports it
    debounce_seconds: float | str = Field(default=DEFAULT_DEBOUNCE_SECONDS)
    timeout_seconds: int = Field(default=WATCH_TIMEOUT_SECONDS, ge=1)
    date_format: str = Field(default=DEFAULT_DATE_FORMAT)
    message_template: str = Field(default=DEFAULT_MESSAGE_TEMPLATE)
    username: str | None = None
    password: SecretStr | None = None

    @field_validator("debounce_seconds", mode="before")
    @classmethod
    def numeric_seconds(cls, v: float | str) -> float | str:
        try:
            return float(v)
        except (TypeError, ValueError):
            return str(v)

    @field_validator("date_format", mode="before")
    @classmethod
    def strip_date_prefix(cls, v: str | None) -> str:
        """Accept date(1) style formats such as '+%Y-%m-%d'."""
        if v is None:
            return ""
        return v[1:] if v.startswith("+") else v

    @field_validator("username", mode="before")
    @classmethod
    def empty_username_is_none(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("password", mode="before")
    @classmethod
    def empty_password_is_none(cls, v: str | None) -> str | None:
        return v or None

    @property
    def password_value(self) -> str | None:
        """Plain password for handing to the VCS client."""
        return self.password.get_secret_value() if self.password else None


@dataclass(frozen=True)
class ResolvedTarget:
    """A watch target classified and expanded at startup."""

    path: Path
    is_directory: bool
    working_dir: Path
    watch_command: tuple[str, ...]
    add_argument: str

    @property
    def command_line(self) -> str:
        """Watcher invocation rendered as a shell command line."""
        return shlex.join(self.watch_command)


class StatusKind(str, Enum):
    """Change kinds reported in the first column of a status line."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    UNTRACKED = "?"
    MISSING = "!"
    REPLACED = "R"
    CONFLICTED = "C"
    IGNORED = "I"
    OBSTRUCTED = "~"
    EXTERNAL = "X"
    OTHER = ""

    @classmethod
    def from_code(cls, code: str) -> "StatusKind":
        """Map a one-character status code to a kind."""
        for kind in cls:
            if kind.value and kind.value == code:
                return kind
        return cls.OTHER


DELETE_KINDS = frozenset({StatusKind.DELETED, StatusKind.MISSING})
ADD_KINDS = frozenset({StatusKind.ADDED, StatusKind.UNTRACKED})


@dataclass(frozen=True)
class StatusEntry:
    """One parsed status line."""

    kind: StatusKind
    path: str


@dataclass
class Changeset:
    """Status entries from a single query, in report order."""

    entries: list[StatusEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if the status query reported nothing."""
        return not self.entries

    @property
    def to_delete(self) -> list[str]:
        """Paths marked deleted or missing."""
        return [e.path for e in self.entries if e.kind in DELETE_KINDS]

    @property
    def to_add(self) -> list[str]:
        """Paths marked added or untracked."""
        return [e.path for e in self.entries if e.kind in ADD_KINDS]

    def __len__(self) -> int:
        return len(self.entries)
