"""
Module execution entry point.

Allows running with: python -m ledger_cli
"""

import sys
from ledger_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
