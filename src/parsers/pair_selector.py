"""Canonical pair selection among the DEX pairs reported for one token."""

from collections.abc import Iterable

from src.parsers.dexscreener.models import DexScreenerPair


def pair_liquidity_usd(pair: DexScreenerPair) -> float:
    """Pool liquidity in USD; missing or unparseable counts as 0."""
    if pair.liquidity is None or pair.liquidity.usd is None:
        return 0.0
    return pair.liquidity.usd


def select_best_pair(pairs: Iterable[DexScreenerPair]) -> DexScreenerPair | None:
    """Pick the pair with the deepest liquidity. Ties keep the first seen.

    Empty input returns None; callers treat that as a risk signal, not an error.
    """
    best: DexScreenerPair | None = None
    best_liquidity = 0.0
    for pair in pairs:
        liquidity = pair_liquidity_usd(pair)
        if best is None or liquidity > best_liquidity:
            best, best_liquidity = pair, liquidity
    return best
