import pytest

from cauldron_refund.console import print_refund_report
from cauldron_refund.errors import PrecisionLoss
from cauldron_refund.models import TokenPrice

from conftest import make_config

SPELL_PRICE = TokenPrice(53604, 8)


def test_refund_report_prints_all_lines(engine_factory, capsys) -> None:
    quote = engine_factory().quote(SPELL_PRICE)
    print_refund_report(quote, make_config())
    out = capsys.readouterr().out
    assert "CAULDRON INTEREST REFUND" in out
    assert "$0.00053604" in out


def test_refund_report_prints_nothing_on_precision_loss(engine_factory, capsys) -> None:
    quote = engine_factory().quote(SPELL_PRICE)
    with pytest.raises(PrecisionLoss):
        print_refund_report(quote, make_config(), display_decimals=19)
    assert capsys.readouterr().out == ""
