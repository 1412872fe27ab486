import pytest

from cauldron_refund import calculations
from cauldron_refund.errors import DivisionByZero, NegativeBribePool
from cauldron_refund.models import BorrowPosition, BribePool, RefundPolicy, TokenPrice, VotingPower

E18 = 10**18


@pytest.mark.parametrize(
    ("elastic", "base", "part"),
    [
        (1_000_000 * E18, 900_000 * E18, 9_000 * E18),
        (7, 3, 2),
        (0, 5, 5),
        (10**30 + 1, 10**29 - 3, 12345678901234567890),
    ],
)
def test_borrow_amount_is_floor_of_part_times_elastic_over_base(elastic, base, part) -> None:
    pos = BorrowPosition(elastic_total=elastic, base_total=base, user_base_part=part)
    assert calculations.borrow_amount(pos) == part * elastic // base


def test_borrow_amount_scenario() -> None:
    pos = BorrowPosition(elastic_total=1_000_000 * E18, base_total=900_000 * E18, user_base_part=9_000 * E18)
    assert calculations.borrow_amount(pos) == 10_000 * E18


def test_borrow_amount_zero_base_fails() -> None:
    with pytest.raises(DivisionByZero):
        calculations.borrow_amount(BorrowPosition(elastic_total=1, base_total=0, user_base_part=1))


def test_max_weekly_refund_operation_order() -> None:
    assert calculations.max_weekly_refund(10_000 * E18) == 13461538461538461538
    # Multiply before dividing: 19999 * 700 // 10000 // 52 == 26, dividing first would give 13.
    assert calculations.max_weekly_refund(19999) == 26


def test_max_weekly_refund_is_monotonic() -> None:
    values = [calculations.max_weekly_refund(b) for b in range(0, 50_000, 37)]
    assert values == sorted(values)


def test_voter_weighted_votes() -> None:
    assert calculations.voter_weighted_votes(VotingPower(ve_balance=500 * E18, gauge_share_bps=10_000)) == 500 * E18
    assert calculations.voter_weighted_votes(VotingPower(ve_balance=500 * E18, gauge_share_bps=2_500)) == 125 * E18


def test_weekly_bribe_pool_scenario() -> None:
    assert calculations.weekly_bribe_pool(BribePool(rewards_accrued=200 * E18, rewards_claimed=50 * E18)) == 150 * E18


def test_weekly_bribe_pool_negative_fails_loudly() -> None:
    with pytest.raises(NegativeBribePool) as exc:
        calculations.weekly_bribe_pool(BribePool(rewards_accrued=50, rewards_claimed=51))
    assert exc.value.rewards_claimed == 51
    assert isinstance(exc.value, ValueError)


def test_voter_bribe_share_scenario() -> None:
    assert calculations.voter_bribe_share(150 * E18, 500 * E18, 100_000 * E18) == 75 * 10**16


def test_voter_bribe_share_without_votes_fails() -> None:
    with pytest.raises(DivisionByZero):
        calculations.voter_bribe_share(150 * E18, 0, 0)


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        (TokenPrice(53604, 8), 402030000000000),
        (TokenPrice(536040000000000, 18), 402030000000000),
    ],
)
def test_bribe_dollar_value_uses_price_scale(price, expected) -> None:
    assert calculations.bribe_dollar_value(75 * 10**16, price) == expected


def test_select_refund_floor_first() -> None:
    assert calculations.select_refund(RefundPolicy.FLOOR_FIRST, 10, 3) == 10
    assert calculations.select_refund(RefundPolicy.FLOOR_FIRST, 10, 30) == 10
    assert calculations.select_refund(RefundPolicy.FLOOR_FIRST, 0, 30) == 30


@pytest.mark.parametrize(("max_refund", "bribe"), [(10, 3), (3, 10), (0, 7), (5, 5)])
def test_select_refund_minimum_never_exceeds_either_input(max_refund, bribe) -> None:
    refund = calculations.select_refund(RefundPolicy.MINIMUM, max_refund, bribe)
    assert refund <= max_refund
    assert refund <= bribe


def test_token_amount_for_round_trip_within_one_unit() -> None:
    price = TokenPrice(53604, 8)
    refund = 13461538461538461538
    tokens = calculations.token_amount_for(refund, price)
    back = tokens * price.value // 10**price.decimals
    assert refund - back <= 1
    assert back <= refund


def test_token_amount_for_zero_price_fails() -> None:
    with pytest.raises(DivisionByZero):
        calculations.token_amount_for(1, TokenPrice(0, 8))


def test_invert_oracle_spot() -> None:
    price = calculations.invert_oracle_spot(2000 * E18)
    assert price == TokenPrice(500_000_000_000_000, 18)


def test_invert_oracle_spot_zero_fails() -> None:
    with pytest.raises(DivisionByZero):
        calculations.invert_oracle_spot(0)
