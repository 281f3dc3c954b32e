"""Allow running headgrid as ``python -m headgrid``."""

import sys

from .cli import main


sys.exit(main())
