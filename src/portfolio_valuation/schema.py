import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, constr

from .models import Investment, Quote, Transaction


class _Row(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)


class InvestmentRow(_Row):
    """InvestorId;InvestmentId;Type;ISIN;City;FondsInvestor"""

    investor_id: str = ''
    investment_id: constr(min_length=1)
    type: str = ''
    isin: str = ''
    city: str = ''
    fonds_investor: str = ''

    def to_investment(self) -> Investment:
        return Investment(
            investment_id=self.investment_id,
            investor_id=self.investor_id,
            type=self.type,
            isin=self.isin,
            city=self.city,
            fonds_investor=self.fonds_investor,
        )


class TransactionRow(_Row):
    """InvestmentId;Type;Date;Value"""

    investment_id: constr(min_length=1)
    type: str
    date: datetime.date
    value: Decimal

    def to_transaction(self) -> Transaction:
        return Transaction(investment_id=self.investment_id, type=self.type, value=self.value, date=self.date)


class QuoteRow(_Row):
    """ISIN;Date;PricePerShare"""

    isin: str = ''
    date: datetime.date
    price_per_share: Decimal

    def to_quote(self) -> Quote:
        return Quote(isin=self.isin, date=self.date, price_per_share=self.price_per_share)
