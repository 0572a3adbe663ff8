"""
svnwatch Subversion Client.

Implements the VersionControl adapter by invoking the `svn` binary.
Every command runs with the operating directory as its working directory.
Requires Python 3.11+.
"""

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from svnwatch.models import Changeset
from svnwatch.utils.logger import LoggerMixin
from svnwatch.utils.process import CommandResult, printable, run_command
from svnwatch.vcs.status import parse_status

# Diagnostic svn prints for a directory outside any working copy
NOT_A_WORKING_COPY_CODE = "155007"

Runner = Callable[..., CommandResult]


class SvnClient(LoggerMixin):
    """
    Subversion adapter.

    Command failures are logged and returned, never raised: the watch
    loop keeps going whatever svn does.
    """

    def __init__(
        self,
        binary: str,
        working_dir: Path,
        username: str | None = None,
        password: str | None = None,
        runner: Runner = run_command,
    ) -> None:
        """
        Initialize the client.

        Args:
            binary: svn executable name or path
            working_dir: Directory every command runs in
            username: Optional --username for update and commit
            password: Optional --password for update and commit
            runner: Command runner, replaceable in tests
        """
        self.binary = binary
        self.working_dir = working_dir
        self._username = username
        self._password = password
        self._runner = runner

    @property
    def remote_args(self) -> list[str]:
        """Flags for commands that may talk to the repository."""
        args = ["--non-interactive"]
        if self._username:
            args += ["--username", self._username]
        if self._password:
            args += ["--password", self._password]
        return args

    def _run(self, *args: str, extra: Sequence[str] = ()) -> CommandResult:
        argv = [self.binary, *args, *extra]
        secrets: Iterable[str] = (self._password,) if self._password else ()
        result = self._runner(argv, cwd=self.working_dir, secrets=secrets)
        if not result.ok:
            self.log.warning(
                "vcs_command_failed",
                command=result.command,
                code=result.code,
                stderr=printable(result.stderr.strip()),
            )
        else:
            self.log.debug("vcs_command_succeeded", command=result.command)
        return result

    def status(self) -> CommandResult:
        """Run `svn status` in the operating directory."""
        return self._run("status")

    def list_changes(self) -> Changeset:
        """Query status and parse it; a failed query yields no changes."""
        result = self.status()
        if not result.ok:
            return Changeset()
        return Changeset(entries=parse_status(result.stdout))

    def add(self, path: str) -> CommandResult:
        return self._run("add", path)

    def delete(self, path: str) -> CommandResult:
        return self._run("delete", path)

    def update(self) -> CommandResult:
        return self._run("update", extra=self.remote_args)

    def commit(self, message: str) -> CommandResult:
        return self._run("commit", extra=[*self.remote_args, "-m", message])


def svn_status_probe(client: SvnClient) -> bool:
    """
    Working-copy predicate based on `svn status` diagnostics.

    svn reports W155007 (E155007 on some versions) for directories
    outside a working copy.
    """
    result = client.status()
    return NOT_A_WORKING_COPY_CODE not in result.output
