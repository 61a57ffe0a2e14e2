"""Allow ``python -m regnotify``."""

import sys

from .cli import main

sys.exit(main())
