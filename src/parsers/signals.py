"""Risk and market-health signals derived from normalized provider data.

Pure functions: no IO, time is injected through ``now``.

Risk model: each fired rule is a ``high`` (2 points) or ``medium`` (1 point)
signal. Score >= 4 is High, >= 2 is Medium, anything lower is Low.
"""

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from src.models.report import (
    MarketSignals,
    PriceChangeByWindow,
    RiskAssessment,
    RiskSignal,
    TxnsByWindow,
    VolumeSeries,
)
from src.parsers.dexscreener.models import DexScreenerPair
from src.parsers.geckoterminal.models import OHLCVCandle
from src.parsers.pair_selector import pair_liquidity_usd

LOW_HOLDER_COUNT = 50
LOW_LIQUIDITY_USD = 5000.0
HIGH_RISK_SCORE = 4
MEDIUM_RISK_SCORE = 2
VOLATILITY_WINDOW_DAYS = 7
SECONDS_PER_DAY = 86_400

MSG_MINT_AUTHORITY = "Mint authority is still enabled (token supply can be increased)."
MSG_FREEZE_AUTHORITY = "Freeze authority is enabled (accounts can be frozen)."
MSG_LOW_HOLDERS = "Very low holder count (<= 50)."
MSG_LOW_LIQUIDITY = "Low DEX liquidity (< $5k)."
MSG_NO_PAIR = "No active DEX pair found for this mint."


def signal_points(signal: RiskSignal) -> int:
    return 2 if signal.level == "high" else 1


def risk_label(signals: Sequence[RiskSignal]) -> str:
    score = sum(signal_points(s) for s in signals)
    if score >= HIGH_RISK_SCORE:
        return "High"
    if score >= MEDIUM_RISK_SCORE:
        return "Medium"
    return "Low"


def assess_risk(
    pair: DexScreenerPair | None,
    *,
    holder_count: int | None = None,
    mint_authority: str | None = None,
    freeze_authority: str | None = None,
) -> RiskAssessment:
    signals: list[RiskSignal] = []

    if mint_authority:
        signals.append(RiskSignal(level="high", message=MSG_MINT_AUTHORITY))
    if freeze_authority:
        signals.append(RiskSignal(level="medium", message=MSG_FREEZE_AUTHORITY))
    if holder_count is not None and holder_count <= LOW_HOLDER_COUNT:
        signals.append(RiskSignal(level="medium", message=MSG_LOW_HOLDERS))
    if pair is not None and pair_liquidity_usd(pair) < LOW_LIQUIDITY_USD:
        signals.append(RiskSignal(level="medium", message=MSG_LOW_LIQUIDITY))
    if pair is None:
        signals.append(RiskSignal(level="high", message=MSG_NO_PAIR))

    return RiskAssessment(label=risk_label(signals), signals=signals)


def summarize_candles(candles: Sequence[OHLCVCandle]) -> VolumeSeries:
    """Volume totals and 7d volatility from daily candles (newest first).

    Candles without a finite volume add nothing to the sums. No candles at all
    means the totals are unknown (None), not zero.
    """
    if not candles:
        return VolumeSeries()

    def _total(rows: Sequence[OHLCVCandle]) -> float:
        return sum(c.volume for c in rows if c.volume is not None)

    latest30 = candles[:30]
    return VolumeSeries(
        volume7dUsd=_total(latest30[:VOLATILITY_WINDOW_DAYS]),
        volume30dUsd=_total(latest30),
        volatility7dPercent=compute_volatility(candles),
    )


def compute_volatility(candles: Sequence[OHLCVCandle], window: int = VOLATILITY_WINDOW_DAYS) -> float | None:
    """Mean daily range (high - low) / open * 100 over the newest ``window`` candles.

    Candles with non-positive open or missing high/low are skipped.
    """
    ranges: list[float] = []
    for candle in candles[:window]:
        if candle.open is None or not math.isfinite(candle.open) or candle.open <= 0:
            continue
        if candle.high is None or candle.low is None:
            continue
        ranges.append((candle.high - candle.low) / candle.open * 100)
    if not ranges:
        return None
    return sum(ranges) / len(ranges)


def pool_age_days(created_at_ms: int | None, now: datetime) -> float | None:
    """Days since pool creation; future timestamps (clock skew) clamp to 0.

    A missing or zero timestamp is unknown, as it is for ``dexPair.pairCreatedAt``.
    """
    if not created_at_ms:
        return None
    age_sec = now.timestamp() - created_at_ms / 1000
    return max(age_sec, 0.0) / SECONDS_PER_DAY


def compute_market_signals(
    pair: DexScreenerPair | None,
    *,
    market_cap_usd: float | None = None,
    volume_24h_usd: float | None = None,
    volume_7d_usd: float | None = None,
    volatility_7d_percent: float | None = None,
    now: datetime | None = None,
) -> MarketSignals:
    now = now or datetime.now(UTC)

    liquidity = pair_liquidity_usd(pair) if pair is not None else None
    liq_to_mcap = None
    if liquidity and market_cap_usd and liquidity > 0 and market_cap_usd > 0:
        liq_to_mcap = liquidity / market_cap_usd

    avg_daily_7d = volume_7d_usd / 7 if volume_7d_usd is not None else None
    trend = None
    if volume_24h_usd is not None and avg_daily_7d:
        trend = volume_24h_usd / avg_daily_7d

    txns = TxnsByWindow()
    price_change = PriceChangeByWindow()
    if pair is not None:
        if pair.txns is not None:
            txns = TxnsByWindow.model_validate(pair.txns.model_dump())
        if pair.priceChange is not None:
            price_change = PriceChangeByWindow.model_validate(pair.priceChange.model_dump())

    return MarketSignals(
        txns=txns,
        priceChangePercent=price_change,
        liquidityToMcapRatio=liq_to_mcap,
        poolAgeDays=pool_age_days(pair.pairCreatedAt, now) if pair is not None else None,
        avgDailyVolume7dUsd=avg_daily_7d,
        volumeTrend24hVs7dRatio=trend,
        volatility7dPercent=volatility_7d_percent,
    )
