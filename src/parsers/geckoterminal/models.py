"""Models for GeckoTerminal OHLCV responses."""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from src.parsers.coerce import LenientFloat, LenientInt


class OHLCVCandle(BaseModel):
    """One daily candle. GeckoTerminal sends rows as [ts, o, h, l, c, v]."""

    timestamp: LenientInt = None  # unix seconds
    open: LenientFloat = None
    high: LenientFloat = None
    low: LenientFloat = None
    close: LenientFloat = None
    volume: LenientFloat = None  # USD

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "OHLCVCandle":
        padded = list(row[:6]) + [None] * (6 - len(row[:6]))
        ts, o, h, low, c, v = padded
        return cls(timestamp=ts, open=o, high=h, low=low, close=c, volume=v)
