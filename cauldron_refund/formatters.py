"""Fixed-point helpers, formatting and conversion utilities."""

from decimal import Decimal, localcontext

from cauldron_refund.errors import PrecisionLoss
from cauldron_refund.models import TokenPrice


def scale_factor(decimals: int) -> int:
    """10**decimals as a Python int (arbitrary precision)."""
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    return 10**decimals


def format_for_display(value: int, source_decimals: int, display_decimals: int) -> str:
    """
    Render a fixed-point integer with exactly `display_decimals` fractional digits.

    The value is truncated (floor division) to the display scale first; the rendered
    digits are exact, there is no further rounding.
    """
    if source_decimals < display_decimals:
        raise PrecisionLoss(
            f"cannot display {display_decimals} decimals of a value with {source_decimals} decimals"
        )
    truncated = int(value) // scale_factor(source_decimals - display_decimals)
    if display_decimals == 0:
        return str(truncated)
    whole, frac = divmod(truncated, scale_factor(display_decimals))
    return f"{whole}.{frac:0{display_decimals}d}"


def as_int(value, *, default: int = 0) -> int:
    """Convert a raw contract/JSON value to int."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        v = value.strip()
        if v.startswith("0x"):
            return int(v, 16)
        return int(v)
    return int(value)


def parse_hex_bytes(value: str | bytes | None) -> bytes:
    """Parse 0x-prefixed (or bare) hex into bytes. Empty/None gives b''."""
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    s = value.strip()
    if s.lower().startswith("0x"):
        s = s[2:]
    return bytes.fromhex(s)


def short_addr(addr: str) -> str:
    return f"{addr[:10]}...{addr[-6:]}"


def format_usd(value: int, *, decimals: int = 18, display_decimals: int = 2) -> str:
    return f"${format_for_display(value, decimals, display_decimals)}"


def format_token(value: int, symbol: str, *, decimals: int = 18, display_decimals: int = 2) -> str:
    return f"{format_for_display(value, decimals, display_decimals)} {symbol}"


def format_price(price: TokenPrice) -> str:
    """Format a price at its full scale, e.g. 53604 @ 8dp -> $0.00053604."""
    return f"${format_for_display(price.value, price.decimals, price.decimals)}"


def parse_decimal_amount(text: str, decimals: int) -> int:
    """Parse a human decimal string ("0.00053604") into a fixed-point integer, exactly."""
    try:
        amount = Decimal(text.strip())
    except ArithmeticError as ex:
        raise ValueError(f"not a decimal number: {text!r}") from ex
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"amount must be a finite non-negative number: {text!r}")
    with localcontext() as ctx:
        ctx.prec = len(amount.as_tuple().digits) + decimals + 1
        scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise PrecisionLoss(f"{text} has more than {decimals} decimals")
    return int(scaled)
