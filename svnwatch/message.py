"""
svnwatch Commit Message Rendering.

Splices the current time into the commit message template.
Requires Python 3.11+.
"""

from collections.abc import Callable
from datetime import datetime

from svnwatch.models import DATE_TOKEN


class CommitMessage:
    """
    Renders commit messages from a template.

    Every occurrence of %d is replaced by the current local time in the
    configured strftime format. A template without %d is returned verbatim,
    whatever the format.
    """

    def __init__(
        self,
        template: str,
        date_format: str,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.template = template
        self.date_format = date_format
        self._clock = clock
        self._static = DATE_TOKEN not in template

    @property
    def is_static(self) -> bool:
        """Check if the template has nothing to substitute."""
        return self._static

    def timestamp(self) -> str:
        """Current time in the configured format; empty for an empty format."""
        if not self.date_format:
            return ""
        return self._clock().strftime(self.date_format)

    def render(self) -> str:
        """Render the message for the current moment."""
        if self._static:
            return self.template
        return self.template.replace(DATE_TOKEN, self.timestamp())
