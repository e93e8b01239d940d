"""Pydantic models for CoinGecko /coins/{id} responses (fields we read only)."""

from pydantic import BaseModel

from src.parsers.coerce import LenientFloat


class CoinGeckoCurrencyValue(BaseModel):
    usd: LenientFloat = None

    model_config = {"extra": "ignore"}


class CoinGeckoMarketData(BaseModel):
    current_price: CoinGeckoCurrencyValue | None = None
    market_cap: CoinGeckoCurrencyValue | None = None
    total_volume: CoinGeckoCurrencyValue | None = None
    price_change_percentage_24h: LenientFloat = None

    model_config = {"extra": "ignore"}


class CoinGeckoCoin(BaseModel):
    id: str = ""
    symbol: str = ""
    name: str = ""
    genesis_date: str | None = None  # "YYYY-MM-DD"
    market_data: CoinGeckoMarketData | None = None

    model_config = {"extra": "ignore"}
