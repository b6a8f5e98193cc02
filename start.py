"""
Remindly Start - launch the desktop reminder window

Same as running `remindly` after `pip install -e .`.
"""

import sys

from remindly.ui.app import main


if __name__ == "__main__":
    sys.exit(main())
