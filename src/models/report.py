"""Response contract for /api/analyze.

Field names are camelCase because the browser client reads them verbatim.
Every key is always present; unknown values serialize as null.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from src.parsers.news.models import NewsItem


class Chain(str, Enum):
    SOLANA = "solana"
    ETHEREUM = "ethereum"
    BASE = "base"
    ARBITRUM = "arbitrum"
    BSC = "bsc"
    BITCOIN = "bitcoin"


EVM_CHAINS = frozenset({Chain.ETHEREUM, Chain.BASE, Chain.ARBITRUM, Chain.BSC})


class AnalysisRequest(BaseModel):
    chain: Chain = Chain.SOLANA
    address: str = ""


class RiskSignal(BaseModel):
    level: Literal["high", "medium"]
    message: str


class RiskAssessment(BaseModel):
    label: Literal["Low", "Medium", "High"] = "Low"
    signals: list[RiskSignal] = Field(default_factory=list)


class TxnCount(BaseModel):
    buys: int | None = None
    sells: int | None = None


class TxnsByWindow(BaseModel):
    m5: TxnCount | None = None
    h1: TxnCount | None = None
    h6: TxnCount | None = None
    h24: TxnCount | None = None


class PriceChangeByWindow(BaseModel):
    m5: float | None = None
    h1: float | None = None
    h6: float | None = None
    h24: float | None = None


class VolumeSeries(BaseModel):
    volume7dUsd: float | None = None
    volume30dUsd: float | None = None
    volatility7dPercent: float | None = None


class MarketSignals(BaseModel):
    txns: TxnsByWindow = Field(default_factory=TxnsByWindow)
    priceChangePercent: PriceChangeByWindow = Field(default_factory=PriceChangeByWindow)
    liquidityToMcapRatio: float | None = None
    poolAgeDays: float | None = None
    avgDailyVolume7dUsd: float | None = None
    volumeTrend24hVs7dRatio: float | None = None
    volatility7dPercent: float | None = None


class TokenInfo(BaseModel):
    address: str = ""
    symbol: str | None = None
    name: str | None = None


class DexPairSummary(BaseModel):
    dexId: str
    url: str | None = None
    chainId: str
    pairAddress: str
    liquidityUsd: float
    baseToken: TokenInfo | None = None
    quoteToken: TokenInfo | None = None
    pairCreatedAt: str | None = None


class ChartLinks(BaseModel):
    dexUrl: str | None = None
    embedUrl: str | None = None


class SourceFlags(BaseModel):
    dexScreener: bool = False
    holderScan: bool = False
    helius: bool = False
    geckoTerminal: bool = False
    coinGecko: bool = False
    news: bool = False


class AnalysisReport(BaseModel):
    chain: Chain
    mint: str
    priceUsd: float | None = None
    marketCapUsd: float | None = None
    dailyChangePercent: float | None = None
    volume24hUsd: float | None = None
    volume7dUsd: float | None = None
    volume30dUsd: float | None = None
    firstMintedAt: str | None = None
    holders: int | None = None
    mintAuthority: str | None = None
    freezeAuthority: str | None = None
    dexPair: DexPairSummary | None = None
    chart: ChartLinks = Field(default_factory=ChartLinks)
    risk: RiskAssessment = Field(default_factory=RiskAssessment)
    market: MarketSignals = Field(default_factory=MarketSignals)
    news: list[NewsItem] = Field(default_factory=list)
    sources: SourceFlags = Field(default_factory=SourceFlags)
