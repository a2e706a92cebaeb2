"""Allow ``python -m localeroute``."""

import sys

from localeroute.cli import main

sys.exit(main())
