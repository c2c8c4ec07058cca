# portfolio.py
from __future__ import annotations

import datetime
import logging
from decimal import Decimal
from typing import Dict, Optional, Union

from .ledger import Ledger
from .validators import to_date
from .valuation import ValuationEngine

LOGGER = logging.getLogger(__name__)


class PortfolioAggregator:
    """Values every investment nominally owned by one investor.

    Attributes:
        ledger: the loaded Ledger
        engine: ValuationEngine used per investment (built over ledger when omitted)
    """

    def __init__(self, ledger: Ledger, engine: Optional[ValuationEngine] = None) -> None:
        self.ledger = ledger
        self.engine = engine if engine is not None else ValuationEngine(ledger)

    def evaluate(self, investor_id: str, reference_date: Union[datetime.date, str]) -> Dict[str, Decimal]:
        """Return investment_id -> raw (unrounded) value for investor_id as of reference_date.

        Order follows the ledger's input order. Each investment is valued with
        its own, empty cycle guard. An investor without investments yields {}.
        """
        as_of = to_date(reference_date, 'reference_date')
        breakdown: Dict[str, Decimal] = {}
        for investment in self.ledger.investments_for_investor(investor_id):
            breakdown[investment.investment_id] = self.engine.value_held_by_investor(
                investment.investment_id, investor_id, as_of, set()
            )
        LOGGER.info('Evaluated %d investments for %s as of %s', len(breakdown), investor_id, as_of.isoformat())
        return breakdown


__all__ = ['PortfolioAggregator']
