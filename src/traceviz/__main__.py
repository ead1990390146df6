"""Allow ``python -m traceviz``."""

import sys

from traceviz.cli import main

sys.exit(main())
