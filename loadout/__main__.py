"""Allow running with ``python -m loadout``."""
import sys

from .cli import main

sys.exit(main())
