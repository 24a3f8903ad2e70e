"""Entry point for ``python -m tagnorm``."""

import sys

from tagnorm.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
