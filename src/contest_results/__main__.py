"""Allow ``python -m contest_results``."""

import sys

from .cli import main

sys.exit(main())
