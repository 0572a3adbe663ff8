"""
svnwatch.

Watch a file or directory and commit every change to its Subversion
working copy as it happens.
Requires Python 3.11+.
"""

__version__ = "0.1.0"
