"""Allow running the package as a module: python -m cauldron_refund"""

import sys

from cauldron_refund.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
