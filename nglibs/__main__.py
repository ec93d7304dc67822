"""
Entry point for running nglibs as a module: python -m nglibs
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
