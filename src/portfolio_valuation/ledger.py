"""
# ledger.py

Provides Ledger, the read-only, indexed store of investments, transactions
and quotes that the valuation engine queries.

Design notes:
- Indices are built once in the constructor and never mutated afterwards,
  so a Ledger can be shared between concurrent evaluations without locks.
- Investments keep their input order. A repeated investment_id replaces the
  earlier record for lookups by id but keeps its original position.
- Transactions (per investment) and quotes (per ISIN) are sorted by date
  with a stable sort, so same-day entries keep their input order.
- Every lookup for an absent key returns an empty result rather than raising.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Investment, Quote, Transaction

LOGGER = logging.getLogger(__name__)


class Ledger:
    """Indexed, immutable view over the three input datasets."""

    def __init__(
        self,
        investments: Iterable[Investment] = (),
        transactions: Iterable[Transaction] = (),
        quotes: Iterable[Quote] = (),
    ) -> None:
        self._investments: Dict[str, Investment] = {}
        self._by_investor: Dict[str, List[Investment]] = {}
        for inv in investments:
            if not isinstance(inv, Investment):
                raise TypeError(f'expected Investment, got {type(inv).__name__}')
            self._investments[inv.investment_id] = inv
            self._by_investor.setdefault(inv.investor_id, []).append(inv)

        self._children: Dict[str, List[Investment]] = {}
        for inv in self._investments.values():
            if inv.fonds_investor:
                self._children.setdefault(inv.fonds_investor, []).append(inv)

        grouped_tx: Dict[str, List[Transaction]] = {}
        for tx in transactions:
            if not isinstance(tx, Transaction):
                raise TypeError(f'expected Transaction, got {type(tx).__name__}')
            grouped_tx.setdefault(tx.investment_id, []).append(tx)
        self._transactions: Dict[str, Tuple[Transaction, ...]] = {
            key: tuple(sorted(txs, key=lambda t: t.date)) for key, txs in grouped_tx.items()
        }

        grouped_quotes: Dict[str, List[Quote]] = {}
        for quote in quotes:
            if not isinstance(quote, Quote):
                raise TypeError(f'expected Quote, got {type(quote).__name__}')
            grouped_quotes.setdefault(quote.isin, []).append(quote)
        self._quotes: Dict[str, Tuple[Quote, ...]] = {
            key: tuple(sorted(qs, key=lambda q: q.date)) for key, qs in grouped_quotes.items()
        }

        LOGGER.debug(
            'Ledger built with %d investments, %d transaction series, %d quote series',
            len(self._investments),
            len(self._transactions),
            len(self._quotes),
        )

    # --- Investment lookups -----------------------------------------
    def get_investment(self, investment_id: str) -> Optional[Investment]:
        """Return the investment or None if not present."""
        return self._investments.get(investment_id)

    def list_investments(self) -> List[Investment]:
        return list(self._investments.values())

    def investments_for_investor(self, investor_id: str) -> List[Investment]:
        """Return the investments nominally owned by investor_id, in input order."""
        return list(self._by_investor.get(investor_id, ()))

    def children_of(self, fund_id: str) -> List[Investment]:
        """Return every investment whose fonds_investor is fund_id."""
        return list(self._children.get(fund_id, ()))

    # --- Time series lookups ----------------------------------------
    def transactions_for(self, investment_id: str) -> Tuple[Transaction, ...]:
        """Return the transactions recorded against investment_id, oldest first."""
        return self._transactions.get(investment_id, ())

    def quotes_for(self, isin: str) -> Tuple[Quote, ...]:
        """Return the quotes recorded for isin, oldest first."""
        return self._quotes.get(isin, ())


__all__ = ['Ledger']
