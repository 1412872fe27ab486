"""Error types raised while computing a refund."""

import requests


class RefundError(Exception):
    """Base class for every failure of a refund computation."""


class ReadFailure(RefundError, RuntimeError):
    """A contract read failed at the RPC/network level. Never retried here."""

    def __init__(self, method: str, address: str, block_identifier: int | str, cause: BaseException | None = None):
        self.method = method
        self.address = address
        self.block_identifier = block_identifier
        self.cause = cause
        msg = f"{method} on {address} at block {block_identifier} failed"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.cause, (TimeoutError, requests.exceptions.Timeout))


class DivisionByZero(RefundError, ZeroDivisionError):
    """No refund is computable: a zero debt base, zero gauge votes or a zero price."""


class PrecisionLoss(RefundError, ValueError):
    """Formatting asked for more decimals than the source scale carries."""


class NegativeBribePool(RefundError, ValueError):
    """Claims exceed deposited bribes, usually a stale or inconsistent read."""

    def __init__(self, rewards_accrued: int, rewards_claimed: int):
        self.rewards_accrued = rewards_accrued
        self.rewards_claimed = rewards_claimed
        super().__init__(
            f"bribe pool is negative: claimed {rewards_claimed} > accrued {rewards_accrued}"
        )
