"""
# valuation.py

Provides ValuationEngine, the recursive resolver that values an investment
as of a reference date.

Two valuations are offered:
  - value_held_by_investor: the investor's own stake. Funds are valued as
    the investor's Percentage of the fund's consolidated holdings.
  - value_as_fund_held: the investment's entire value as if wholly owned,
    used while summing a fund's holdings. No percentage is applied.

Both run through one recursion parameterized by OwnershipMode. Fund
ownership may be cyclic: every descent carries a `visiting` set of the fund
ids currently being expanded, and a fund met again while still in that set
contributes 0 and is reported as a warning.

All arithmetic is exact Decimal arithmetic; the only rounding applied is the
quantization of a fund percentage share to fund_share_places digits.
"""

from __future__ import annotations

import datetime
import logging
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Set

from .aggregation import TimeWindowedAggregator
from .ledger import Ledger
from .models import Investment, InvestmentKind, TransactionType
from .validators import exact_arithmetic

LOGGER = logging.getLogger(__name__)

_ZERO = Decimal('0')

DEFAULT_FUND_SHARE_PLACES = 10


class ValuationError(Exception):
    """Raised when the engine is constructed without the data it needs."""


class OwnershipMode(Enum):
    INVESTOR = 'investor'
    CONSOLIDATED = 'consolidated'


class ValuationEngine:
    """Resolve investment values as of a date.

    ledger: the loaded Ledger. Required.
    aggregator: optional TimeWindowedAggregator; one over `ledger` is created
        when omitted.
    fund_share_places: fractional digits kept when applying a fund
        percentage (at least 10).
    """

    def __init__(
        self,
        ledger: Optional[Ledger],
        aggregator: Optional[TimeWindowedAggregator] = None,
        fund_share_places: int = DEFAULT_FUND_SHARE_PLACES,
    ) -> None:
        if ledger is None:
            raise ValuationError('no ledger configured; load investments, transactions and quotes first')
        if fund_share_places < DEFAULT_FUND_SHARE_PLACES:
            raise ValueError(f'fund_share_places must be at least {DEFAULT_FUND_SHARE_PLACES}')
        self._ledger = ledger
        self._aggregator = aggregator if aggregator is not None else TimeWindowedAggregator(ledger)
        self._fund_share_quantum = Decimal(1).scaleb(-fund_share_places)

    # --- Public API -------------------------------------------------
    def value_held_by_investor(
        self,
        investment_id: str,
        investor_id: str,
        as_of: datetime.date,
        visiting: Optional[Set[str]] = None,
    ) -> Decimal:
        """Return the investor's own value in investment_id as of as_of.

        visiting is the cycle guard; pass None (or an empty set) for a
        top-level valuation.
        """
        LOGGER.debug('Valuing %s for investor %s as of %s', investment_id, investor_id, as_of)
        guard = set() if visiting is None else visiting
        with exact_arithmetic():
            return self._resolve(investment_id, as_of, guard, OwnershipMode.INVESTOR)

    def value_as_fund_held(
        self,
        investment_id: str,
        as_of: datetime.date,
        visiting: Optional[Set[str]] = None,
    ) -> Decimal:
        """Return the full (100% owned) value of investment_id as of as_of."""
        guard = set() if visiting is None else visiting
        with exact_arithmetic():
            return self._resolve(investment_id, as_of, guard, OwnershipMode.CONSOLIDATED)

    # --- Recursion --------------------------------------------------
    def _resolve(self, investment_id: str, as_of: datetime.date, visiting: Set[str], mode: OwnershipMode) -> Decimal:
        investment = self._ledger.get_investment(investment_id)
        if investment is None:
            LOGGER.debug('Unknown investment %s valued as 0', investment_id)
            return _ZERO

        kind = investment.kind
        if kind is InvestmentKind.FUND:
            return self._fund_value(investment, as_of, visiting, mode)
        if kind is InvestmentKind.STOCK:
            return self._stock_value(investment, as_of)
        return self._real_estate_value(investment, as_of)

    def _fund_value(self, fund: Investment, as_of: datetime.date, visiting: Set[str], mode: OwnershipMode) -> Decimal:
        fund_id = fund.investment_id
        percentage: Optional[Decimal] = None
        if mode is OwnershipMode.INVESTOR:
            percentage = self._aggregator.sum_by_type(fund_id, TransactionType.PERCENTAGE, as_of)
            # a zero stake never descends into the fund's holdings
            if percentage == 0:
                return _ZERO

        if fund_id in visiting:
            LOGGER.warning('Cycle detected when evaluating fund %s; counting it as 0', fund_id)
            return _ZERO

        visiting.add(fund_id)
        try:
            total = _ZERO
            for child in self._ledger.children_of(fund_id):
                total += self._resolve(child.investment_id, as_of, visiting, OwnershipMode.CONSOLIDATED)
        finally:
            visiting.discard(fund_id)

        if percentage is None:
            return total
        share = (total * percentage).scaleb(-2)
        return share.quantize(self._fund_share_quantum, rounding=ROUND_HALF_UP)

    def _stock_value(self, stock: Investment, as_of: datetime.date) -> Decimal:
        shares = self._aggregator.sum_by_type(stock.investment_id, TransactionType.SHARES, as_of)
        if shares == 0 or not stock.isin:
            return _ZERO
        price = self._aggregator.latest_price_on_or_before(stock.isin, as_of)
        if price is None:
            LOGGER.debug('No price for %s on or before %s; %s valued as 0', stock.isin, as_of, stock.investment_id)
            return _ZERO
        return shares * price

    def _real_estate_value(self, estate: Investment, as_of: datetime.date) -> Decimal:
        estate_value = self._aggregator.last_by_type(estate.investment_id, TransactionType.ESTATE, as_of)
        building_value = self._aggregator.last_by_type(estate.investment_id, TransactionType.BUILDING, as_of)
        return estate_value + building_value


__all__ = ['ValuationEngine', 'ValuationError', 'OwnershipMode']
