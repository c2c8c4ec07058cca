"""aggregation.py

Provides TimeWindowedAggregator, which answers "as of date D" questions over
the ledger's date-sorted transaction and quote series.

Transaction lookups are owner-agnostic: they consider every transaction
attached to an investment id, whoever nominally initiated it.
"""

from __future__ import annotations

import datetime
from bisect import bisect_right
from decimal import Decimal
from typing import Optional, Union

from .ledger import Ledger
from .models import TransactionType
from .validators import exact_arithmetic

TxType = Union[str, TransactionType]

_ZERO = Decimal('0')


class TimeWindowedAggregator:
    """Sum/last-value transaction queries and latest-quote lookups as of a date."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def sum_by_type(self, investment_id: str, tx_type: TxType, as_of: datetime.date) -> Decimal:
        """Sum the values of matching transactions dated on or before as_of.

        Returns Decimal 0 when nothing matches.
        """
        total = _ZERO
        with exact_arithmetic():
            for tx in self._ledger.transactions_for(investment_id):
                if tx.date > as_of:
                    break
                if tx.matches(tx_type):
                    total += tx.value
        return total

    def last_by_type(self, investment_id: str, tx_type: TxType, as_of: datetime.date) -> Decimal:
        """Return the value of the latest matching transaction dated on or before as_of.

        Among several transactions on that date the one appearing last wins.
        Returns Decimal 0 when nothing matches.
        """
        value = _ZERO
        for tx in self._ledger.transactions_for(investment_id):
            if tx.date > as_of:
                break
            if tx.matches(tx_type):
                value = tx.value
        return value

    def latest_price_on_or_before(self, isin: str, as_of: datetime.date) -> Optional[Decimal]:
        """Return the price of the latest quote for isin dated on or before as_of.

        Returns None when no price is available (blank or unknown ISIN, or no
        quote early enough); a quoted price of zero is returned as Decimal 0.
        """
        if not isin:
            return None
        quotes = self._ledger.quotes_for(isin)
        idx = bisect_right(quotes, as_of, key=lambda q: q.date)
        if idx == 0:
            return None
        return quotes[idx - 1].price_per_share


__all__ = ['TimeWindowedAggregator']
