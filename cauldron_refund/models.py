"""Data models for the cauldron refund calculator."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from cauldron_refund.constants import (
    CURVE_GAUGE_CONTROLLER_ADDR,
    CURVE_MIM_GAUGE_ADDR,
    DEFAULT_BORROWER_ADDR,
    DEFAULT_VOTER_ADDR,
    MIM_CAULDRON_ADDR,
    PRICE_DECIMALS_CHOICES,
    SPELL_ADDR,
    VE_CRV_ADDR,
    YBRIBE_ADDRS,
)


class RefundPolicy(Enum):
    """How the refund is chosen between the rate cap and the voter's bribes."""

    # Pay the rate-capped refund whenever it is positive, else the bribe value.
    FLOOR_FIRST = "floor-first"
    # Pay whichever of the two candidates is smaller.
    MINIMUM = "minimum"


@dataclass(frozen=True)
class BorrowPosition:
    """Rebasing debt totals of the cauldron plus the borrower's share count."""

    elastic_total: int
    base_total: int
    user_base_part: int


@dataclass(frozen=True)
class VotingPower:
    """Voter's veCRV balance and the basis points of it allocated to the gauge."""

    ve_balance: int
    gauge_share_bps: int


@dataclass(frozen=True)
class GaugeTotals:
    total_votes_for_gauge: int


@dataclass(frozen=True)
class BribePool:
    """Running yBribe totals for one (gauge, reward token) pair."""

    rewards_accrued: int
    rewards_claimed: int


@dataclass(frozen=True)
class TokenPrice:
    """USD price of one whole token, as an integer at `decimals` fixed-point scale."""

    value: int
    decimals: int

    def rescale(self, decimals: int) -> "TokenPrice":
        """Convert to another scale. Reducing precision floors."""
        if decimals == self.decimals:
            return self
        if decimals > self.decimals:
            return TokenPrice(self.value * 10 ** (decimals - self.decimals), decimals)
        return TokenPrice(self.value // 10 ** (self.decimals - decimals), decimals)


@dataclass(frozen=True)
class RefundConfig:
    """Immutable identity and contract configuration for a RefundEngine.

    `policy` and `price_decimals` have no defaults: historical versions of the
    calculator disagree on both, so every caller has to pick.
    """

    borrower: str
    voter: str
    policy: RefundPolicy
    price_decimals: int
    cauldron: str = MIM_CAULDRON_ADDR
    ve_token: str = VE_CRV_ADDR
    gauge_controller: str = CURVE_GAUGE_CONTROLLER_ADDR
    gauge: str = CURVE_MIM_GAUGE_ADDR
    bribe_contract: str = YBRIBE_ADDRS[2]
    reward_token: str = SPELL_ADDR
    oracle: str | None = None
    oracle_data: bytes = field(default=b"")
    # Fixed weekly bribe (18dp) used instead of reading the bribe contract.
    weekly_bribe_override: int | None = None

    def __post_init__(self) -> None:
        if self.price_decimals not in PRICE_DECIMALS_CHOICES:
            raise ValueError(f"price_decimals must be one of {PRICE_DECIMALS_CHOICES}, got {self.price_decimals}")
        if not isinstance(self.policy, RefundPolicy):
            raise ValueError(f"policy must be a RefundPolicy, got {self.policy!r}")
        if self.weekly_bribe_override is not None and self.weekly_bribe_override < 0:
            raise ValueError("weekly_bribe_override must be >= 0")

    @classmethod
    def mainnet(
        cls,
        *,
        policy: RefundPolicy,
        price_decimals: int,
        borrower: str = DEFAULT_BORROWER_ADDR,
        voter: str = DEFAULT_VOTER_ADDR,
        bribe_version: int = 2,
        **overrides,
    ) -> "RefundConfig":
        """Build a config for the mainnet CRV cauldron / MIM gauge deployment."""
        if bribe_version not in YBRIBE_ADDRS:
            raise ValueError(f"unknown yBribe version {bribe_version}; expected one of {sorted(YBRIBE_ADDRS)}")
        cfg = cls(
            borrower=borrower,
            voter=voter,
            policy=policy,
            price_decimals=price_decimals,
            bribe_contract=YBRIBE_ADDRS[bribe_version],
        )
        return replace(cfg, **overrides) if overrides else cfg


@dataclass(frozen=True)
class RefundQuote:
    """Everything computed for one refund, all values read at `block_identifier`."""

    token_price: TokenPrice
    policy: RefundPolicy
    block_identifier: int | str
    borrow_amount: int
    max_weekly_refund: int
    voter_bribe_share: int
    voter_bribe_dollar_value: int
    refund_amount: int
    token_to_return: int


@dataclass(frozen=True)
class WeeklyBribeSnapshot:
    """Bribe pool state at the first block of a weekly epoch."""

    epoch: datetime
    block_number: int
    rewards_accrued: int
    rewards_claimed: int

    @property
    def distributable(self) -> int:
        return self.rewards_accrued - self.rewards_claimed
