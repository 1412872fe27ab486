"""Console output formatting."""

from cauldron_refund.constants import DEFAULT_DISPLAY_DECIMALS, TOKEN_DECIMALS
from cauldron_refund.formatters import format_for_display, format_price, format_token, format_usd, short_addr
from cauldron_refund.models import RefundConfig, RefundQuote, WeeklyBribeSnapshot


def _signed(value: int, display_decimals: int) -> str:
    if value < 0:
        return "-" + format_for_display(-value, TOKEN_DECIMALS, display_decimals)
    return format_for_display(value, TOKEN_DECIMALS, display_decimals)


def print_refund_report(
    quote: RefundQuote,
    config: RefundConfig,
    *,
    display_decimals: int = DEFAULT_DISPLAY_DECIMALS,
    token_symbol: str = "SPELL",
) -> None:
    """Print the refund summary. Every line is formatted before anything is printed."""
    dd = display_decimals
    header = [
        "=" * 70,
        "💸 CAULDRON INTEREST REFUND",
        f"   🧱 block={quote.block_identifier}  •  policy={quote.policy.value}",
        "=" * 70,
        f"   Borrower: {config.borrower}",
        f"   Voter:    {config.voter}",
        f"   {token_symbol} price: {format_price(quote.token_price)} ({quote.token_price.decimals}dp)",
    ]
    if config.weekly_bribe_override is not None:
        header.append(
            f"   Weekly bribe: fixed at {format_token(config.weekly_bribe_override, token_symbol, display_decimals=dd)}"
        )
    amounts = [
        "   " + "─" * 50,
        f"   Borrow amount ($):          {format_usd(quote.borrow_amount, display_decimals=dd)}",
        f"   Voter bribes ({token_symbol}):       {format_token(quote.voter_bribe_share, token_symbol, display_decimals=dd)}",
        f"   Total bribes received ($): {format_usd(quote.voter_bribe_dollar_value, display_decimals=dd)}",
        f"   Max weekly refund ($):      {format_usd(quote.max_weekly_refund, display_decimals=dd)}",
        f"   Total refund amount ($):    {format_usd(quote.refund_amount, display_decimals=dd)}",
        f"   Total {token_symbol} to return:     {format_token(quote.token_to_return, token_symbol, display_decimals=dd)}",
        "",
    ]
    print("\n".join(header + amounts))


def print_bribe_history(
    rows: list[WeeklyBribeSnapshot],
    config: RefundConfig,
    *,
    display_decimals: int = DEFAULT_DISPLAY_DECIMALS,
) -> None:
    """Print one line per weekly epoch."""
    print(f"\n📜 Weekly bribes for gauge {short_addr(config.gauge)} (bribe contract {short_addr(config.bribe_contract)})")
    print("─" * 70)
    print(f"{'epoch':<12} {'block':>10} {'accrued':>18} {'claimed':>18} {'remaining':>18}")
    for row in rows:
        print(
            f"{row.epoch:%Y-%m-%d}   {row.block_number:>10} "
            f"{_signed(row.rewards_accrued, display_decimals):>18} "
            f"{_signed(row.rewards_claimed, display_decimals):>18} "
            f"{_signed(row.distributable, display_decimals):>18}"
        )
    print("")
