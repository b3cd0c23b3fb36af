"""
Entry point for module execution (``python -m schemalint``).

Delegates to the CLI handler in ``schemalint.cli.__main__``.
"""

import sys

from schemalint.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
