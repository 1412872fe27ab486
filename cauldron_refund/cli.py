"""CLI and main logic."""

import argparse
import os
import sys

from cauldron_refund.blocks import as_utc_datetime, locate_block
from cauldron_refund.console import print_bribe_history, print_refund_report
from cauldron_refund.constants import (
    DEFAULT_BORROWER_ADDR,
    DEFAULT_DISPLAY_DECIMALS,
    DEFAULT_PUBLIC_ETH_RPC_URLS,
    DEFAULT_VOTER_ADDR,
    LEGACY_WEEKLY_SPELL_BRIBE,
    PRICE_DECIMALS_CHOICES,
    TOKEN_DECIMALS,
    YBRIBE_ADDRS,
)
from cauldron_refund.contracts import bind_ports
from cauldron_refund.engine import RefundEngine
from cauldron_refund.errors import RefundError
from cauldron_refund.formatters import format_price, parse_decimal_amount, parse_hex_bytes
from cauldron_refund.models import RefundConfig, RefundPolicy, TokenPrice

# Internal defaults (not exposed as CLI flags)
DEFAULT_TIMEOUT = 30


def display_decimals_arg(value: str) -> int:
    """argparse type: display decimals must fit the 18-decimal amounts being shown."""
    try:
        decimals = int(value)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from ex
    if not 0 <= decimals <= TOKEN_DECIMALS:
        raise argparse.ArgumentTypeError(f"must be between 0 and {TOKEN_DECIMALS}, got {decimals}")
    return decimals


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        description="Weekly interest refund for an Abracadabra CRV cauldron borrower, capped by the voter's SPELL bribes."
    )
    p.add_argument(
        "--rpc-url",
        default=None,
        help="Execution-layer RPC URL. Falls back to ETH_RPC_URL, then to public endpoints.",
    )
    p.add_argument("--borrower", default=DEFAULT_BORROWER_ADDR, help="Cauldron borrower address.")
    p.add_argument("--voter", default=DEFAULT_VOTER_ADDR, help="veCRV voter address.")
    p.add_argument(
        "--price",
        default=None,
        help="SPELL price in USD, e.g. 0.00053604. Required unless --oracle is given.",
    )
    p.add_argument(
        "--price-decimals",
        type=int,
        choices=PRICE_DECIMALS_CHOICES,
        default=8,
        help="Fixed-point scale of --price. Default: 8.",
    )
    p.add_argument(
        "--policy",
        choices=[policy.value for policy in RefundPolicy],
        default=RefundPolicy.FLOOR_FIRST.value,
        help="floor-first: pay the rate cap when positive, else the bribe value. "
        "minimum: pay the smaller of the two. Default: floor-first.",
    )
    p.add_argument("--oracle", default=None, help="Price oracle address (peekSpot). Used when --price is not set.")
    p.add_argument("--oracle-data", default="0x", help="Hex payload passed to peekSpot. Default: 0x.")
    pin = p.add_mutually_exclusive_group()
    pin.add_argument("--block", type=int, default=None, help="Read all state at this block height.")
    pin.add_argument("--date", default=None, help="Read all state at the first block at/after this UTC date.")
    p.add_argument(
        "--bribe-version",
        type=int,
        choices=sorted(YBRIBE_ADDRS),
        default=2,
        help="yBribe contract version holding the SPELL bribes. Default: 2.",
    )
    bribe_source = p.add_mutually_exclusive_group()
    bribe_source.add_argument(
        "--fixed-weekly-bribe",
        type=int,
        nargs="?",
        const=LEGACY_WEEKLY_SPELL_BRIBE // 10**TOKEN_DECIMALS,
        default=None,
        metavar="SPELL",
        help="Use a fixed weekly bribe (whole SPELL) instead of reading yBribe. "
        "Without a value uses the initial agreement's 134,193,798 SPELL per week.",
    )
    p.add_argument(
        "--display-decimals",
        type=display_decimals_arg,
        default=DEFAULT_DISPLAY_DECIMALS,
        help=f"Decimals shown in the report (0-{TOKEN_DECIMALS}). Default: {DEFAULT_DISPLAY_DECIMALS}.",
    )
    bribe_source.add_argument(
        "--history-since",
        default=None,
        metavar="DATE",
        help="Print the bribe pool at every weekly epoch since DATE instead of a refund.",
    )
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> RefundConfig:
    """Build the engine configuration from parsed arguments. Raises ValueError."""
    fixed = args.fixed_weekly_bribe
    return RefundConfig.mainnet(
        policy=RefundPolicy(args.policy),
        price_decimals=args.price_decimals,
        borrower=args.borrower,
        voter=args.voter,
        bribe_version=args.bribe_version,
        oracle=args.oracle,
        oracle_data=parse_hex_bytes(args.oracle_data),
        weekly_bribe_override=None if fixed is None else fixed * 10**TOKEN_DECIMALS,
    )


def rpc_candidates(rpc_url: str | None) -> list[str]:
    """RPC URLs to try, in order."""
    explicit = rpc_url or os.getenv("ETH_RPC_URL")
    if explicit:
        return [explicit]
    return list(DEFAULT_PUBLIC_ETH_RPC_URLS)


def main(argv: list[str]) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 2

    if args.price is None and config.oracle is None and args.history_since is None:
        print("Error: a SPELL price is required. Provide --price or --oracle.", file=sys.stderr)
        return 2

    try:
        from web3 import Web3
    except ImportError as ex:  # pragma: no cover
        print("Missing dependency. Run: pip install -e .", file=sys.stderr)
        raise SystemExit(2) from ex

    w3 = None
    for url in rpc_candidates(args.rpc_url):
        candidate = Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": DEFAULT_TIMEOUT}))
        if candidate.is_connected():
            w3 = candidate
            break
        print(f"⚠️  failed to connect to RPC at {url}", file=sys.stderr)
    if w3 is None:
        print("Error: no reachable RPC. Provide --rpc-url or set ETH_RPC_URL.", file=sys.stderr)
        return 2

    try:
        ports = bind_ports(w3, config)

        block_identifier: int | str = "latest"
        if args.block is not None:
            block_identifier = args.block
        elif args.date is not None:
            block_identifier = locate_block(w3, int(as_utc_datetime(args.date).timestamp()))
            print(f"ℹ️ {args.date} resolved to block {block_identifier}", file=sys.stderr)

        engine = RefundEngine(config, ports, block_identifier=block_identifier)

        if args.history_since is not None:
            # Lazy import: history walks many blocks and pulls in the progress bar.
            from cauldron_refund.history import collect_bribe_history

            rows = collect_bribe_history(engine, w3, args.history_since)
            print_bribe_history(rows, config, display_decimals=args.display_decimals)
            return 0

        if args.price is not None:
            price = TokenPrice(parse_decimal_amount(args.price, args.price_decimals), args.price_decimals)
        else:
            price = engine.get_token_price_from_oracle()
            print(f"ℹ️ Oracle price: {format_price(price)}", file=sys.stderr)

        quote = engine.quote(price)
        print_refund_report(quote, config, display_decimals=args.display_decimals)
    except RefundError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1
    except ValueError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
