"""CSV loading for the semicolon-separated Investments/Transactions/Quotes feed."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple, Type, TypeVar, Union

from pydantic import ValidationError

from .ledger import Ledger
from .models import Investment, Quote, Transaction
from .schema import InvestmentRow, QuoteRow, TransactionRow
from .validators import MalformedInputError

LOGGER = logging.getLogger(__name__)

INVESTMENTS_FILE = "Investments.csv"
TRANSACTIONS_FILE = "Transactions.csv"
QUOTES_FILE = "Quotes.csv"
DELIMITER = ";"

INVESTMENT_COLUMNS = ("investor_id", "investment_id", "type", "isin", "city", "fonds_investor")
TRANSACTION_COLUMNS = ("investment_id", "type", "date", "value")
QUOTE_COLUMNS = ("isin", "date", "price_per_share")

PathLike = Union[str, Path]
RowModel = TypeVar("RowModel", InvestmentRow, TransactionRow, QuoteRow)


def _read_records(path: Path) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line number, trimmed fields) for every data line after the header.

    Quote characters carry no meaning in the feed; a `"` is kept as text.
    """

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle, delimiter=DELIMITER, quoting=csv.QUOTE_NONE)
        next(reader, None)
        for fields in reader:
            if not any(field.strip() for field in fields):
                continue
            yield reader.line_num, [field.strip() for field in fields]


def _parse(model: Type[RowModel], columns: Sequence[str], fields: List[str], path: Path, line: int) -> RowModel:
    values = {name: fields[idx] if idx < len(fields) else "" for idx, name in enumerate(columns)}
    try:
        return model(**values)
    except ValidationError as exc:
        raise MalformedInputError(f"{path.name} line {line}: {exc.errors()[0]['msg']} ({values})") from exc


def load_investments(path: PathLike) -> List[Investment]:
    """Read Investments.csv. Rows without an InvestmentId are skipped."""

    path = Path(path)
    investments: List[Investment] = []
    for line, fields in _read_records(path):
        if len(fields) < 2 or not fields[1]:
            LOGGER.debug("Skipping %s line %d without an investment id", path.name, line)
            continue
        row = _parse(InvestmentRow, INVESTMENT_COLUMNS, fields, path, line)
        investments.append(row.to_investment())
    LOGGER.info("Loaded %d investments from %s", len(investments), path)
    return investments


def load_transactions(path: PathLike) -> List[Transaction]:
    """Read Transactions.csv (InvestmentId;Type;Date;Value)."""

    path = Path(path)
    transactions: List[Transaction] = []
    for line, fields in _read_records(path):
        row = _parse(TransactionRow, TRANSACTION_COLUMNS, fields, path, line)
        try:
            transactions.append(row.to_transaction())
        except MalformedInputError as exc:
            raise MalformedInputError(f"{path.name} line {line}: {exc}") from exc
    LOGGER.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions


def load_quotes(path: PathLike) -> List[Quote]:
    """Read Quotes.csv (ISIN;Date;PricePerShare)."""

    path = Path(path)
    quotes: List[Quote] = []
    for line, fields in _read_records(path):
        row = _parse(QuoteRow, QUOTE_COLUMNS, fields, path, line)
        try:
            quotes.append(row.to_quote())
        except MalformedInputError as exc:
            raise MalformedInputError(f"{path.name} line {line}: {exc}") from exc
    LOGGER.info("Loaded %d quotes from %s", len(quotes), path)
    return quotes


def load_ledger(data_dir: PathLike) -> Ledger:
    """Load the three CSV files from data_dir into a Ledger."""

    root = Path(data_dir)
    return Ledger(
        investments=load_investments(root / INVESTMENTS_FILE),
        transactions=load_transactions(root / TRANSACTIONS_FILE),
        quotes=load_quotes(root / QUOTES_FILE),
    )


__all__ = [
    "INVESTMENTS_FILE",
    "QUOTES_FILE",
    "TRANSACTIONS_FILE",
    "load_investments",
    "load_ledger",
    "load_quotes",
    "load_transactions",
]
