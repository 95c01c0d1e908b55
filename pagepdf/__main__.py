"""Entry point for ``python -m pagepdf``."""

import sys

from pagepdf.cli import main

sys.exit(main())
