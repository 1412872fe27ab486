import pytest

from cauldron_refund.contracts import ContractPorts
from cauldron_refund.engine import RefundEngine
from cauldron_refund.models import RefundConfig, RefundPolicy

E18 = 10**18


class FakeLendingPool:
    def __init__(self, elastic: int, base: int, part: int):
        self.elastic = elastic
        self.base = base
        self.part = part
        self.blocks: list = []

    def total_borrow(self, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.elastic, self.base

    def user_borrow_part(self, user, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.part


class FakeVoteEscrow:
    def __init__(self, balance: int):
        self.balance = balance
        self.blocks: list = []

    def balance_of(self, user, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.balance


class FakeGaugeController:
    def __init__(self, power_bps: int, total_votes: int):
        self.power_bps = power_bps
        self.total_votes = total_votes
        self.blocks: list = []

    def vote_user_power(self, user, gauge, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.power_bps

    def gauge_weight(self, gauge, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.total_votes


class FakeBribeDistributor:
    def __init__(self, accrued: int, claimed: int):
        self.accrued = accrued
        self.claimed = claimed
        self.blocks: list = []

    def reward_per_gauge(self, gauge, token, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.accrued

    def claims_per_gauge(self, gauge, token, *, block_identifier="latest"):
        self.blocks.append(block_identifier)
        return self.claimed


class FakeOracle:
    def __init__(self, spot: int):
        self.spot = spot
        self.calls: list = []

    def peek_spot(self, data, *, block_identifier="latest"):
        self.calls.append((data, block_identifier))
        return self.spot


def make_ports(
    *,
    elastic=1_000_000 * E18,
    base=900_000 * E18,
    part=9_000 * E18,
    ve_balance=500 * E18,
    power_bps=10_000,
    total_votes=100_000 * E18,
    accrued=200 * E18,
    claimed=50 * E18,
    spot=None,
) -> ContractPorts:
    return ContractPorts(
        lending_pool=FakeLendingPool(elastic, base, part),
        vote_escrow=FakeVoteEscrow(ve_balance),
        gauge_controller=FakeGaugeController(power_bps, total_votes),
        bribe_distributor=FakeBribeDistributor(accrued, claimed),
        oracle=None if spot is None else FakeOracle(spot),
    )


def make_config(policy=RefundPolicy.FLOOR_FIRST, price_decimals=8, **overrides) -> RefundConfig:
    return RefundConfig.mainnet(policy=policy, price_decimals=price_decimals, **overrides)


@pytest.fixture
def engine_factory():
    """Build a RefundEngine over fake ports: engine_factory(policy=..., price_decimals=..., **port_values)."""

    def _make(policy=RefundPolicy.FLOOR_FIRST, price_decimals=8, block_identifier="latest", config=None, **port_values):
        cfg = config or make_config(policy, price_decimals)
        return RefundEngine(cfg, make_ports(**port_values), block_identifier=block_identifier)

    return _make
