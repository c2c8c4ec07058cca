import datetime
import json
from decimal import Decimal

import pytest

from portfolio_valuation.reporting import (
    breakdown_to_dict,
    format_money,
    portfolio_total,
    render_report,
)


REF = datetime.date(2023, 6, 1)


@pytest.mark.parametrize("value, expected", [
    (Decimal("2.345"), "2.35"),
    (Decimal("2.344"), "2.34"),
    (Decimal("-2.345"), "-2.35"),
    (Decimal("1E+3"), "1000.00"),
    (Decimal("350.0000000000"), "350.00"),
    (Decimal("0"), "0.00"),
])
def test_format_money_rounds_half_up_to_two_places(value, expected):
    assert format_money(value) == expected


def test_format_money_custom_places():
    assert format_money(Decimal("1.23456"), places=4) == "1.2346"
    assert format_money(Decimal("1.5"), places=0) == "2"
    with pytest.raises(ValueError):
        format_money(Decimal("1"), places=-1)


def test_portfolio_total_sums_unrounded_values():
    breakdown = {"A": Decimal("0.004"), "B": Decimal("0.004")}
    # rounding each value first would give 0.00
    assert portfolio_total(breakdown) == Decimal("0.008")
    assert format_money(portfolio_total(breakdown)) == "0.01"
    assert portfolio_total({}) == Decimal("0")


def test_render_report_lines():
    breakdown = {"S1": Decimal("1000"), "F1": Decimal("350.0000000000")}
    lines = render_report("Inv1", REF, breakdown).splitlines()
    assert lines[0] == "Portfolio evaluation for Inv1 on 2023-06-01"
    assert lines[1] == "  S1" + " " * 18 + " -> " + " " * 5 + "1000.00"
    assert lines[2] == "  F1" + " " * 18 + " -> " + " " * 6 + "350.00"
    assert set(lines[3]) == {"-"}
    assert lines[4].startswith(" TOTAL")
    assert lines[4].endswith("-> 1350.00")


def test_render_report_for_empty_breakdown_has_zero_total():
    lines = render_report("Nobody", REF, {}).splitlines()
    assert len(lines) == 3
    assert lines[-1].endswith("-> 0.00")


def test_breakdown_to_dict_is_json_serializable():
    data = breakdown_to_dict("Inv1", REF, {"S1": Decimal("1000"), "F1": Decimal("350.005")})
    assert data == {
        "investor_id": "Inv1",
        "reference_date": "2023-06-01",
        "investments": {"S1": "1000.00", "F1": "350.01"},
        "total": "1350.01",
    }
    assert json.loads(json.dumps(data)) == data


def test_wide_values_are_formatted_and_totalled_without_loss():
    big = Decimal("1" + "0" * 45 + ".005")
    assert format_money(big) == "1" + "0" * 45 + ".01"
    total = portfolio_total({"A": Decimal(10 ** 45), "B": Decimal("0.004"), "C": Decimal("0.001")})
    assert format_money(total) == "1" + "0" * 45 + ".01"
