import datetime
from decimal import Decimal

import pytest

from portfolio_valuation.ledger import Ledger
from portfolio_valuation.models import Investment, Quote, Transaction


def _tx(investment_id, tx_type, value, date):
    return Transaction(investment_id=investment_id, type=tx_type, value=value, date=date)


def test_empty_ledger_returns_empty_results_for_every_lookup():
    ledger = Ledger()
    assert ledger.get_investment("nope") is None
    assert ledger.investments_for_investor("nobody") == []
    assert ledger.children_of("F1") == []
    assert ledger.transactions_for("S1") == ()
    assert ledger.quotes_for("X") == ()
    assert ledger.list_investments() == []


def test_investments_indexed_by_id_investor_and_parent_fund():
    investments = [
        Investment(investment_id="S1", investor_id="Inv1", type="Stock", isin="X"),
        Investment(investment_id="F1", investor_id="Inv1", type="Fonds"),
        Investment(investment_id="R1", type="RealEstate", fonds_investor="F1"),
        Investment(investment_id="S2", investor_id="Inv2", type="Stock", fonds_investor="F1"),
    ]
    ledger = Ledger(investments=investments)

    assert ledger.get_investment("F1") is investments[1]
    assert [i.investment_id for i in ledger.investments_for_investor("Inv1")] == ["S1", "F1"]
    # blank owner is a key like any other
    assert [i.investment_id for i in ledger.investments_for_investor("")] == ["R1"]
    assert [i.investment_id for i in ledger.children_of("F1")] == ["R1", "S2"]
    assert ledger.children_of("S1") == []


def test_repeated_investment_id_later_record_wins_for_lookup():
    first = Investment(investment_id="S1", investor_id="Inv1", type="Stock", isin="X")
    second = Investment(investment_id="S1", investor_id="Inv1", type="Stock", isin="Y")
    ledger = Ledger(investments=[first, second])
    assert ledger.get_investment("S1") is second
    assert len(ledger.list_investments()) == 1


def test_dangling_fund_reference_is_tolerated():
    ledger = Ledger(investments=[Investment(investment_id="R1", fonds_investor="GHOST")])
    assert ledger.get_investment("GHOST") is None
    assert [i.investment_id for i in ledger.children_of("GHOST")] == ["R1"]


def test_transactions_sorted_by_date_with_stable_ties():
    txs = [
        _tx("S1", "Shares", "3", "2023-03-01"),
        _tx("S1", "Shares", "1", "2023-01-01"),
        _tx("S1", "Shares", "2", "2023-01-01"),
        _tx("S2", "Shares", "9", "2023-02-01"),
    ]
    ledger = Ledger(transactions=txs)
    series = ledger.transactions_for("S1")
    assert [t.value for t in series] == [Decimal("1"), Decimal("2"), Decimal("3")]
    assert [t.date for t in series] == [
        datetime.date(2023, 1, 1),
        datetime.date(2023, 1, 1),
        datetime.date(2023, 3, 1),
    ]
    assert len(ledger.transactions_for("S2")) == 1


def test_quotes_sorted_by_date_per_isin():
    quotes = [
        Quote(isin="X", date="2023-06-01", price_per_share="12"),
        Quote(isin="X", date="2023-01-01", price_per_share="10"),
        Quote(isin="Y", date="2023-01-01", price_per_share="1"),
    ]
    ledger = Ledger(quotes=quotes)
    assert [q.price_per_share for q in ledger.quotes_for("X")] == [Decimal("10"), Decimal("12")]


def test_returned_lists_are_copies():
    ledger = Ledger(investments=[Investment(investment_id="S1", investor_id="Inv1")])
    listed = ledger.investments_for_investor("Inv1")
    listed.clear()
    assert len(ledger.investments_for_investor("Inv1")) == 1


def test_constructor_rejects_non_model_objects():
    with pytest.raises(TypeError):
        Ledger(investments=[{"investment_id": "S1"}])
    with pytest.raises(TypeError):
        Ledger(transactions=["S1;Shares;2023-01-01;1"])
    with pytest.raises(TypeError):
        Ledger(quotes=[("X", "2023-01-01", "1")])
