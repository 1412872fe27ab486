"""Weekly interest refund calculator for an Abracadabra cauldron borrower."""

from typing import NoReturn

__version__ = "0.1.0"


def _entry_point() -> NoReturn:
    """Entry point for the cauldron-refund script."""
    import sys

    from cauldron_refund.cli import main

    raise SystemExit(main(sys.argv[1:]))
