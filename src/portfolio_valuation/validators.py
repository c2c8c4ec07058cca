"""validators.py

Boundary conversion helpers for values entering the valuation engine.

Decimals and calendar dates are parsed once, when records are constructed,
so the engine itself only ever sees well-formed values. Anything that cannot
be parsed raises MalformedInputError instead of being coerced to a default.
"""

from __future__ import annotations

import datetime
from contextlib import contextmanager
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Iterator


class MalformedInputError(ValueError):
    """Raised when a decimal, date or identifier cannot be parsed at the boundary."""


def to_decimal(value: Any, field_name: str = 'value') -> Decimal:
    """Convert value to a finite Decimal.

    Accepts Decimal, int or str. Floats are refused so binary floating point
    never reaches the valuation arithmetic.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise MalformedInputError(f"{field_name} must be a decimal string or Decimal, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
    try:
        dec = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MalformedInputError(f"invalid decimal for {field_name}: {value!r}") from exc
    if not dec.is_finite():
        raise MalformedInputError(f"{field_name} must be finite, got {value!r}")
    return dec


def to_date(value: Any, field_name: str = 'date') -> datetime.date:
    """Convert value to a datetime.date.

    Accepts date, datetime (the time part is dropped) or an ISO YYYY-MM-DD string.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value.strip())
        except ValueError as exc:
            raise MalformedInputError(f"invalid date for {field_name}: {value!r}") from exc
    raise MalformedInputError(f"invalid date for {field_name}: {value!r}")


@contextmanager
def exact_arithmetic() -> Iterator[None]:
    """Run the enclosed block in a Decimal context that never rounds sums or products.

    Precision and exponent limits are at their maximum, so `+`, `*` and
    `scaleb` are exact for any input; the only rounding left is an explicit
    quantize with ROUND_HALF_UP.
    """
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.rounding = ROUND_HALF_UP
        yield


def clean_text(value: Any) -> str:
    """Return value as a trimmed string; None becomes the empty string."""
    if value is None:
        return ''
    return str(value).strip()


def require_text(value: Any, field_name: str) -> str:
    text = clean_text(value)
    if not text:
        raise MalformedInputError(f"{field_name} must be a non-empty string")
    return text


__all__ = [
    'MalformedInputError',
    'to_decimal',
    'to_date',
    'exact_arithmetic',
    'clean_text',
    'require_text',
]
