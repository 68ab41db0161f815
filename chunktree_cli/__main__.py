"""
Module execution entry point.

Allows running with: python -m chunktree_cli
"""

import sys
from chunktree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
