"""Allow ``python -m dynamit``."""

import sys

from dynamit.cli import main

sys.exit(main())
