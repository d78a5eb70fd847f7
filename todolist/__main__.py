"""Allows running the CLI with: python -m todolist"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
