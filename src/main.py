# src/main.py
"""Launch the orrery window (see ``python src/main.py --help``)."""

import sys

from orrery.app import main


if __name__ == "__main__":
    sys.exit(main())
