from pathlib import Path

import pytest


INVESTMENTS_CSV = """InvestorId;InvestmentId;Type;ISIN;City;FondsInvestor
Inv1;S1;Stock;X;;
Inv1;F1;Fonds;;;
;R1;RealEstate;;Berlin;F1
Inv2;;Stock;Y;;
Inv2;H1;Haus;;Munich;
"""

TRANSACTIONS_CSV = """InvestmentId;Type;Date;Value
R1;Building;2023-02-01;200
S1;Shares;2023-01-01;100
F1;Percentage;2023-01-01;50
R1;Estate;2023-01-01;500
S1;Shares;2023-07-01;900
"""

QUOTES_CSV = """ISIN;Date;PricePerShare
X;2023-06-01;12.00
X;2023-01-01;10.00
"""


def write_feed(directory: Path, investments: str = INVESTMENTS_CSV, transactions: str = TRANSACTIONS_CSV, quotes: str = QUOTES_CSV) -> Path:
    (directory / "Investments.csv").write_text(investments, encoding="utf-8")
    (directory / "Transactions.csv").write_text(transactions, encoding="utf-8")
    (directory / "Quotes.csv").write_text(quotes, encoding="utf-8")
    return directory


@pytest.fixture
def feed_dir(tmp_path):
    """Directory holding a small, valid CSV feed.

    As of 2023-05-31: S1 = 100 shares * 10.00 = 1000; F1 = 50% of (500 + 200) = 350.
    """
    return write_feed(tmp_path)
