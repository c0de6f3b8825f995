"""
Module execution entry point.

Allows running with: python -m kaiblock_cli
"""

import sys
from kaiblock_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
