"""Run with ``python -m moodbooster``."""
import sys

from moodbooster.main import main

sys.exit(main())
