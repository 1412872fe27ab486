"""Refund formulas. Pure integer arithmetic, no I/O.

All token and dollar amounts are 18-decimal fixed-point integers except prices,
which carry their own scale in `TokenPrice`. Every division is a floor division and
the order of operations is part of the result: do not reorder multiplications and
divisions.
"""

from cauldron_refund.constants import (
    MAX_REFUND_RATE_BPS,
    ORACLE_INVERSION_NUMERATOR,
    ORACLE_PRICE_DECIMALS,
    TOTAL_BASIS_POINTS,
    WEEKS_IN_YEAR,
)
from cauldron_refund.errors import DivisionByZero, NegativeBribePool
from cauldron_refund.formatters import scale_factor
from cauldron_refund.models import BorrowPosition, BribePool, RefundPolicy, TokenPrice, VotingPower


def borrow_amount(position: BorrowPosition) -> int:
    """Debt owed by the user: userBasePart * elastic / base."""
    if position.base_total == 0:
        raise DivisionByZero("cauldron total borrow base is zero")
    return position.user_base_part * position.elastic_total // position.base_total


def max_weekly_refund(borrowed: int) -> int:
    """Weekly refund cap: borrowed * 700 / 10000 / 52, in that order."""
    return borrowed * MAX_REFUND_RATE_BPS // TOTAL_BASIS_POINTS // WEEKS_IN_YEAR


def voter_weighted_votes(power: VotingPower) -> int:
    """Part of the voter's veCRV balance applied to the gauge."""
    return power.ve_balance * power.gauge_share_bps // TOTAL_BASIS_POINTS


def weekly_bribe_pool(pool: BribePool) -> int:
    """Bribes still to distribute (rollover included). Negative is an error."""
    remaining = pool.rewards_accrued - pool.rewards_claimed
    if remaining < 0:
        raise NegativeBribePool(pool.rewards_accrued, pool.rewards_claimed)
    return remaining


def voter_bribe_share(pool_amount: int, voter_votes: int, total_votes: int) -> int:
    if total_votes == 0:
        raise DivisionByZero("gauge has no votes")
    return pool_amount * voter_votes // total_votes


def bribe_dollar_value(share: int, price: TokenPrice) -> int:
    return share * price.value // scale_factor(price.decimals)


def select_refund(policy: RefundPolicy, max_refund: int, bribe_value: int) -> int:
    if policy is RefundPolicy.FLOOR_FIRST:
        return max_refund if max_refund > 0 else bribe_value
    if policy is RefundPolicy.MINIMUM:
        return min(max_refund, bribe_value)
    raise ValueError(f"unsupported refund policy: {policy!r}")


def token_amount_for(refund_usd: int, price: TokenPrice) -> int:
    """Convert a dollar amount back to tokens using the price's own scale."""
    if price.value == 0:
        raise DivisionByZero("token price is zero")
    return refund_usd * scale_factor(price.decimals) // price.value


def invert_oracle_spot(spot: int) -> TokenPrice:
    """
    Turn an oracle spot rate (tokens per 1 USD, 18dp) into USD per token (18dp).

    Exactly one reciprocal: 1e36 / spot.
    """
    if spot == 0:
        raise DivisionByZero("oracle spot value is zero")
    return TokenPrice(ORACLE_INVERSION_NUMERATOR // spot, ORACLE_PRICE_DECIMALS)
