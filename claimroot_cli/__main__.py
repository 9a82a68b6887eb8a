"""
Module execution entry point.

Allows running with: python -m claimroot_cli
"""

import sys
from claimroot_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
