"""Allow ``python -m localemerge``."""

import sys

from localemerge.cli import main

sys.exit(main())
