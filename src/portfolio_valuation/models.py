"""models.py

Immutable records the valuation engine works on: Investment, Transaction and
Quote, plus the closed InvestmentKind variant that free-text investment types
are normalized onto.

Records are frozen dataclasses. Text fields are trimmed and decimal/date
fields are parsed in __post_init__, so a record that exists is well-formed.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

from .validators import clean_text, require_text, to_date, to_decimal


class InvestmentKind(Enum):
    FUND = 'fund'
    STOCK = 'stock'
    REAL_ESTATE = 'real_estate'


class TransactionType(str, Enum):
    """Transaction types the valuation understands. Matching is case-insensitive."""

    SHARES = 'Shares'
    ESTATE = 'Estate'
    BUILDING = 'Building'
    PERCENTAGE = 'Percentage'


# Known spellings (lower-cased) of each investment kind. Anything else,
# including a blank type, is valued as real estate.
_KIND_SYNONYMS: Dict[str, InvestmentKind] = {
    'fonds': InvestmentKind.FUND,
    'fund': InvestmentKind.FUND,
    'fondsinvest': InvestmentKind.FUND,
    'stock': InvestmentKind.STOCK,
    'aktie': InvestmentKind.STOCK,
    'shares': InvestmentKind.STOCK,
    'realestate': InvestmentKind.REAL_ESTATE,
    'real_estate': InvestmentKind.REAL_ESTATE,
    'estate': InvestmentKind.REAL_ESTATE,
    'immobilie': InvestmentKind.REAL_ESTATE,
    'immobili': InvestmentKind.REAL_ESTATE,
    'real': InvestmentKind.REAL_ESTATE,
}


def classify_investment_type(raw: Optional[str]) -> InvestmentKind:
    """Map a free-text investment type onto InvestmentKind."""
    return _KIND_SYNONYMS.get(clean_text(raw).lower(), InvestmentKind.REAL_ESTATE)


def normalize_transaction_type(tx_type: Union[str, TransactionType, None]) -> str:
    if isinstance(tx_type, TransactionType):
        tx_type = tx_type.value
    return clean_text(tx_type).casefold()


@dataclass(frozen=True)
class Investment:
    """An investment held by an investor or, via fonds_investor, by a fund.

    Fields:
        investment_id: unique key.
        investor_id: nominal owner, may be blank.
        type: free-text category, see classify_investment_type.
        isin: instrument identifier for stock-type investments.
        city: descriptive only.
        fonds_investor: investment_id of the fund holding this investment, blank if none.
    """

    investment_id: str
    investor_id: str = ''
    type: str = ''
    isin: str = ''
    city: str = ''
    fonds_investor: str = ''

    def __post_init__(self) -> None:
        object.__setattr__(self, 'investment_id', require_text(self.investment_id, 'investment_id'))
        for name in ('investor_id', 'type', 'isin', 'city', 'fonds_investor'):
            object.__setattr__(self, name, clean_text(getattr(self, name)))

    @property
    def kind(self) -> InvestmentKind:
        return classify_investment_type(self.type)

    @property
    def is_fund_held(self) -> bool:
        return bool(self.fonds_investor)


@dataclass(frozen=True)
class Transaction:
    """Activity recorded against an investment on a given date.

    value is a share count, an absolute amount or percentage points depending
    on type.
    """

    investment_id: str
    type: str
    value: Decimal
    date: datetime.date

    def __post_init__(self) -> None:
        object.__setattr__(self, 'investment_id', require_text(self.investment_id, 'investment_id'))
        if isinstance(self.type, TransactionType):
            object.__setattr__(self, 'type', self.type.value)
        object.__setattr__(self, 'type', clean_text(self.type))
        object.__setattr__(self, 'value', to_decimal(self.value, 'value'))
        object.__setattr__(self, 'date', to_date(self.date, 'date'))

    def matches(self, tx_type: Union[str, TransactionType]) -> bool:
        """Return True if this transaction's type equals tx_type, ignoring case."""
        return self.type.casefold() == normalize_transaction_type(tx_type)


@dataclass(frozen=True)
class Quote:
    """Price observation for an instrument on a date.

    A blank isin is accepted; such quotes are never selected for a price.
    """

    isin: str
    date: datetime.date
    price_per_share: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, 'isin', clean_text(self.isin))
        object.__setattr__(self, 'date', to_date(self.date, 'date'))
        object.__setattr__(self, 'price_per_share', to_decimal(self.price_per_share, 'price_per_share'))


__all__ = [
    'Investment',
    'InvestmentKind',
    'Quote',
    'Transaction',
    'TransactionType',
    'classify_investment_type',
    'normalize_transaction_type',
]
