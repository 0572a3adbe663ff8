"""
svnwatch Command Line Interface.

Parses options, runs the startup checks and hands over to the watch loop.
Requires Python 3.11+.

Usage:
    svnwatch [-s <secs>] [-d <fmt>] [-m <msg>] [-u <user>] [-p <pw>] <target>
"""

import argparse
import signal
import sys
import threading
from collections.abc import Sequence
from types import FrameType

from svnwatch.environment import probe_environment
from svnwatch.errors import SvnWatchError
from svnwatch.loop import WatchCommitLoop
from svnwatch.models import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_MESSAGE_TEMPLATE,
    WatchConfig,
)
from svnwatch.target import resolve_target
from svnwatch.utils.config import get_settings
from svnwatch.utils.logger import configure_logging, get_logger
from svnwatch.vcs import SvnClient, ensure_working_copy, svn_status_probe
from svnwatch.watcher import InotifyWatcher

logger = get_logger(__name__)

PROG = "svnwatch"

USAGE = f"""\
svnwatch - watch file or directory and svn commit all changes as they happen

Usage:
{PROG} [-s <secs>] [-d <fmt>] [-m <msg>] [-u <user>] [-p <pw>] <target>

Where <target> is the file or folder which should be watched. The target needs
to be in a SVN working copy, or in the case of a folder, it may also be the top
folder of the working copy.

 -s <secs>        after detecting a change to the watched file or directory,
                  wait <secs> seconds until committing, to allow for more
                  write actions of the same batch to finish; default is {DEFAULT_DEBOUNCE_SECONDS} sec
 -d <fmt>         the format string used for the timestamp in the commit
                  message; see 'man strftime' for details; default is
                  "{DEFAULT_DATE_FORMAT}"
 -m <msg>         the commit message used for each commit; all occurrences of
                  %d in the string will be replaced by the formatted date/time
                  (unless the <fmt> specified by -d is empty, in which case %d
                  is replaced by an empty string); the default message is:
                  "{DEFAULT_MESSAGE_TEMPLATE}"
 -u <user>        svn user
 -p <pw>          svn user password

As indicated, several conditions are only checked once at launch of
svnwatch. You can make changes to the repo state and configurations even while
svnwatch is running, but that may lead to undefined and unpredictable (even
destructive) behavior!
It is therefore recommended to terminate svnwatch before changing the repo's
config and restarting it afterwards.

By default, svnwatch tries to use the binaries "svn" and "inotifywait",
expecting to find them in the PATH (it will abort with an error if they cannot
be found). If you want to use binaries that are named differently and/or
located outside of your PATH, you can define replacements in the environment
variables SW_SVN_BIN and SW_INW_BIN for svn and inotifywait, respectively."""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("-h", dest="help", action="store_true")
    parser.add_argument("-s", dest="seconds", default=None)
    parser.add_argument("-d", dest="date_format", default=None)
    parser.add_argument("-m", dest="message", default=None)
    parser.add_argument("-u", dest="user", default=None)
    parser.add_argument("-p", dest="password", default=None)
    parser.add_argument("targets", nargs="*")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> argparse.Namespace | None:
    """
    Parse command line options.

    Unknown flags are ignored.

    Returns:
        Parsed options with a single ``target``, or None when the usage
        text should be shown instead (-h, or not exactly one target)
    """
    args, unknown = _build_parser().parse_known_args(argv)
    # Positionals that follow an option land among the unknown arguments
    targets = [*args.targets, *(arg for arg in unknown if not arg.startswith("-"))]
    ignored = [arg for arg in unknown if arg.startswith("-")]
    if ignored:
        logger.debug("ignoring_unknown_arguments", arguments=ignored)

    if args.help or len(targets) != 1:
        return None

    args.target = targets[0]
    return args


def build_config(args: argparse.Namespace) -> WatchConfig:
    """
    Turn parsed options into the frozen run configuration.

    Option values are taken as given; an unusable -s only shows up
    when the loop debounces.
    """
    values = {
        "debounce_seconds": args.seconds,
        "date_format": args.date_format,
        "message_template": args.message,
        "username": args.user,
        "password": args.password,
    }
    return WatchConfig(**{k: v for k, v in values.items() if v is not None})


def _install_signal_handlers(loop: WatchCommitLoop) -> None:
    """Stop the loop on SIGINT/SIGTERM; a second signal aborts at once."""

    def _handle(signum: int, frame: FrameType | None) -> None:
        if loop.stopped:
            raise KeyboardInterrupt
        logger.info("stop_requested", signal=signal.Signals(signum).name)
        loop.stop()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    configure_logging()

    args = parse_options(argv)
    if args is None:
        print(USAGE)
        return 0

    try:
        config = build_config(args)
        binaries = probe_environment(get_settings().binaries)
        target = resolve_target(args.target, binaries.inotifywait, config.timeout_seconds)
        vcs = SvnClient(
            binaries.svn,
            target.working_dir,
            username=config.username,
            password=config.password_value,
        )
        ensure_working_copy(vcs, svn_status_probe)
    except SvnWatchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    loop = WatchCommitLoop(
        config,
        vcs,
        InotifyWatcher(target.watch_command),
        stop=threading.Event(),
    )
    if threading.current_thread() is threading.main_thread():
        _install_signal_handlers(loop)

    logger.info("watching", target=str(target.path), watcher=target.command_line)
    try:
        loop.run()
    except KeyboardInterrupt:
        logger.warning("aborted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
