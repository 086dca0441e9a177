"""
Entry point for ``python -m canvaslang``.
"""

import sys

from canvaslang.cli import main

if __name__ == "__main__":
    sys.exit(main())
