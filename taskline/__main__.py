"""Entry point for taskline when run as a module.

This allows the package to be run with: python -m taskline
"""

import sys

from taskline.cli import main

if __name__ == "__main__":
    sys.exit(main())
