"""Allow running svnwatch with ``python -m svnwatch``."""

import sys

from svnwatch.cli import main

sys.exit(main())
