from pydantic import BaseModel

from src.parsers.coerce import LenientFloat, LenientInt


class DexScreenerToken(BaseModel):
    address: str = ""
    name: str | None = None
    symbol: str | None = None

    model_config = {"extra": "ignore"}


class DexScreenerWindows(BaseModel):
    """Per-window numbers (volume USD or price change percent)."""

    m5: LenientFloat = None
    h1: LenientFloat = None
    h6: LenientFloat = None
    h24: LenientFloat = None

    model_config = {"extra": "ignore"}


class DexScreenerLiquidity(BaseModel):
    usd: LenientFloat = None
    base: LenientFloat = None
    quote: LenientFloat = None

    model_config = {"extra": "ignore"}


class DexScreenerTxns(BaseModel):
    buys: LenientInt = None
    sells: LenientInt = None

    model_config = {"extra": "ignore"}


class DexScreenerTxnsByPeriod(BaseModel):
    m5: DexScreenerTxns | None = None
    h1: DexScreenerTxns | None = None
    h6: DexScreenerTxns | None = None
    h24: DexScreenerTxns | None = None

    model_config = {"extra": "ignore"}


class DexScreenerPair(BaseModel):
    chainId: str = ""
    dexId: str = ""
    url: str | None = None
    pairAddress: str = ""
    baseToken: DexScreenerToken | None = None
    quoteToken: DexScreenerToken | None = None
    priceUsd: LenientFloat = None
    priceChange: DexScreenerWindows | None = None
    volume: DexScreenerWindows | None = None
    liquidity: DexScreenerLiquidity | None = None
    fdv: LenientFloat = None
    marketCap: LenientFloat = None
    pairCreatedAt: LenientInt = None  # unix ms
    txns: DexScreenerTxnsByPeriod | None = None

    model_config = {"extra": "ignore"}
