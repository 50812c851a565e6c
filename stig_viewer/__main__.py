"""Allow ``python -m stig_viewer``."""

import sys

from stig_viewer.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
