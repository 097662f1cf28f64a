"""Interface for ``python -m kvdb``: runs the integration tester."""

import sys

from .tester import main

if __name__ == "__main__":
    sys.exit(main())
