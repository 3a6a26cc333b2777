"""Allow ``python -m pylox``."""

import sys

from pylox.cli import main

if __name__ == "__main__":
    main(sys.argv[1:])
