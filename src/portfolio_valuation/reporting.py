"""reporting.py

Presentation helpers for a portfolio breakdown: money formatting, the grand
total, a plain-text report and a JSON-friendly dict.

Breakdown values arrive unrounded from the engine; rounding to display
places (HALF_UP) happens only here.
"""

from __future__ import annotations

import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping

from .validators import exact_arithmetic

DEFAULT_DISPLAY_PLACES = 2

_SEPARATOR = '-' * 51


def _quantum(places: int) -> Decimal:
    if places < 0:
        raise ValueError('places must be non-negative')
    return Decimal(1).scaleb(-places)


def format_money(value: Decimal, places: int = DEFAULT_DISPLAY_PLACES) -> str:
    """Round value HALF_UP to `places` digits and render it without exponent."""
    quantum = _quantum(places)
    with exact_arithmetic():
        return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), 'f')


def portfolio_total(breakdown: Mapping[str, Decimal]) -> Decimal:
    """Sum the unrounded breakdown values."""
    total = Decimal('0')
    with exact_arithmetic():
        for value in breakdown.values():
            total += value
    return total


def render_report(
    investor_id: str,
    reference_date: datetime.date,
    breakdown: Mapping[str, Decimal],
    places: int = DEFAULT_DISPLAY_PLACES,
) -> str:
    """Render the breakdown as a text report with one line per investment and a TOTAL line."""
    lines = [f'Portfolio evaluation for {investor_id} on {reference_date.isoformat()}']
    for investment_id, value in breakdown.items():
        lines.append('  %-20s -> %12s' % (investment_id, format_money(value, places)))
    lines.append(_SEPARATOR)
    lines.append(' TOTAL                            -> ' + format_money(portfolio_total(breakdown), places))
    return '\n'.join(lines)


def breakdown_to_dict(
    investor_id: str,
    reference_date: datetime.date,
    breakdown: Mapping[str, Decimal],
    places: int = DEFAULT_DISPLAY_PLACES,
) -> Dict[str, Any]:
    """Return a JSON-friendly report; Decimals are rendered as rounded decimal strings."""
    return {
        'investor_id': investor_id,
        'reference_date': reference_date.isoformat(),
        'investments': {key: format_money(value, places) for key, value in breakdown.items()},
        'total': format_money(portfolio_total(breakdown), places),
    }


__all__ = ['format_money', 'portfolio_total', 'render_report', 'breakdown_to_dict']
