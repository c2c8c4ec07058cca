"""Application configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from .reporting import DEFAULT_DISPLAY_PLACES
from .valuation import DEFAULT_FUND_SHARE_PLACES

ENV_PREFIX = "PORTFOLIO_VALUATION_"


def _read_int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise RuntimeError(f"{ENV_PREFIX}{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    data_dir: Path = Path(".")
    log_level: str = "INFO"
    fund_share_places: int = DEFAULT_FUND_SHARE_PLACES
    display_places: int = DEFAULT_DISPLAY_PLACES

    @staticmethod
    def load(env: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from ``PORTFOLIO_VALUATION_*`` environment variables."""

        source = dict(os.environ if env is None else env)
        data_dir = source.get(ENV_PREFIX + "DATA_DIR", "").strip() or "."
        log_level = source.get(ENV_PREFIX + "LOG_LEVEL", "").strip() or "INFO"

        return Settings(
            data_dir=Path(data_dir),
            log_level=log_level,
            fund_share_places=_read_int(source, "FUND_SHARE_PLACES", DEFAULT_FUND_SHARE_PLACES, DEFAULT_FUND_SHARE_PLACES),
            display_places=_read_int(source, "DISPLAY_PLACES", DEFAULT_DISPLAY_PLACES, 0),
        )


__all__ = ["Settings", "ENV_PREFIX"]
