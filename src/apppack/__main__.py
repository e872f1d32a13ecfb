"""Main entry point for apppack.

Usage:
    python -m apppack validate <path>
    python -m apppack info <path>
    python -m apppack --help
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main() or 0)
