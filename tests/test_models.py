import pytest

from cauldron_refund.constants import YBRIBE_V3_ADDR
from cauldron_refund.models import RefundConfig, RefundPolicy, TokenPrice, WeeklyBribeSnapshot


def test_config_requires_known_price_scale() -> None:
    with pytest.raises(ValueError):
        RefundConfig.mainnet(policy=RefundPolicy.MINIMUM, price_decimals=6)


def test_config_requires_policy_enum() -> None:
    with pytest.raises(ValueError):
        RefundConfig.mainnet(policy="minimum", price_decimals=8)


def test_config_bribe_version() -> None:
    cfg = RefundConfig.mainnet(policy=RefundPolicy.MINIMUM, price_decimals=18, bribe_version=3)
    assert cfg.bribe_contract == YBRIBE_V3_ADDR
    with pytest.raises(ValueError):
        RefundConfig.mainnet(policy=RefundPolicy.MINIMUM, price_decimals=18, bribe_version=1)


def test_config_is_immutable() -> None:
    cfg = RefundConfig.mainnet(policy=RefundPolicy.FLOOR_FIRST, price_decimals=8)
    with pytest.raises(AttributeError):
        cfg.voter = "0x0"


def test_token_price_rescale() -> None:
    price = TokenPrice(53604, 8)
    assert price.rescale(18) == TokenPrice(536040000000000, 18)
    assert price.rescale(18).rescale(8) == price
    assert TokenPrice(536049999999999, 18).rescale(8) == price
    assert price.rescale(8) is price


def test_weekly_snapshot_distributable() -> None:
    from datetime import datetime, timezone

    row = WeeklyBribeSnapshot(datetime(2023, 1, 5, tzinfo=timezone.utc), 1, 200, 50)
    assert row.distributable == 150
