"""
svnwatch Version Control Package.

Adapter interface over the VCS client and its Subversion implementation.
Requires Python 3.11+.
"""

from svnwatch.vcs.base import VersionControl, WorkingCopyPredicate, ensure_working_copy
from svnwatch.vcs.status import parse_status
from svnwatch.vcs.svn import SvnClient, svn_status_probe

__all__ = [
    "VersionControl",
    "WorkingCopyPredicate",
    "ensure_working_copy",
    "parse_status",
    "SvnClient",
    "svn_status_probe",
]
