"""GeckoTerminal public API client: daily OHLCV for a DEX pool.

Optional provider: unsupported network, missing pool or any failure yields
an empty candle list, never an exception.
"""

import httpx
from loguru import logger

from src.parsers.coerce import dig
from src.parsers.geckoterminal.models import OHLCVCandle

BASE_URL = "https://api.geckoterminal.com/api/v2"
MAX_DAILY_CANDLES = 30

NETWORKS = {
    "solana": "solana",
    "ethereum": "eth",
    "bsc": "bsc",
    "base": "base",
    "arbitrum": "arbitrum",
}


def network_for_chain(chain: str) -> str | None:
    return NETWORKS.get(chain)


class GeckoTerminalClient:
    """Async REST client for GeckoTerminal (no auth required)."""

    def __init__(self, timeout: float = 10.0) -> None:
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_daily_candles(self, chain: str, pool_address: str | None) -> list[OHLCVCandle]:
        """Fetch up to 30 daily candles, newest first."""
        network = network_for_chain(chain)
        if not network or not pool_address:
            return []

        path = f"/networks/{network}/pools/{pool_address}/ohlcv/day"
        try:
            resp = await self._client.get(path, params={"limit": MAX_DAILY_CANDLES})
        except httpx.RequestError as e:
            logger.warning(f"[GECKOTERMINAL] Request failed for {pool_address[:12]}: {type(e).__name__}: {e}")
            return []

        if resp.status_code != 200:
            logger.debug(f"[GECKOTERMINAL] HTTP {resp.status_code} for {pool_address[:12]}")
            return []

        try:
            data = resp.json()
        except ValueError:
            return []

        rows = dig(data, "data", "attributes", "ohlcv_list")
        if not isinstance(rows, list):
            return []

        candles: list[OHLCVCandle] = []
        for row in rows[:MAX_DAILY_CANDLES]:
            if not isinstance(row, list):
                logger.debug(f"[GECKOTERMINAL] Skipping non-list OHLCV row: {row!r}")
                continue
            candles.append(OHLCVCandle.from_row(row))
        return candles
