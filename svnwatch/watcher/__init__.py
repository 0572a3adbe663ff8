"""
svnwatch File Watcher Package.

Blocking wait on filesystem events and the debounce that follows it.
Requires Python 3.11+.
"""

from svnwatch.watcher.debouncer import Debouncer
from svnwatch.watcher.inotify import InotifyWatcher, WatchOutcome

__all__ = ["Debouncer", "InotifyWatcher", "WatchOutcome"]
