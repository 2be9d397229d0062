"""
Entry point for module execution (``python -m argtail``).

This module delegates execution to the CLI handler in ``argtail.cli.__main__``.
"""

import sys

from argtail.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
