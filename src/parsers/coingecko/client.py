"""CoinGecko public API client: reference market data for native assets."""

import httpx
from loguru import logger
from pydantic import ValidationError

from src.parsers.coingecko.models import CoinGeckoCoin
from src.parsers.exceptions import MalformedResponseError, UpstreamUnavailableError

BASE_URL = "https://api.coingecko.com/api/v3"
PROVIDER = "CoinGecko"

COIN_PARAMS = {
    "localization": "false",
    "tickers": "false",
    "market_data": "true",
    "community_data": "false",
    "developer_data": "false",
    "sparkline": "false",
}


class CoinGeckoClient:
    """Async REST client for CoinGecko (free tier, no key).

    Mandatory where used: every failure raises an UpstreamError subclass.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_coin(self, coin_id: str) -> CoinGeckoCoin:
        try:
            resp = await self._client.get(f"/coins/{coin_id}", params=COIN_PARAMS)
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(PROVIDER, f"{type(e).__name__}: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.warning(f"[COINGECKO] HTTP {resp.status_code} for {coin_id}")
            raise UpstreamUnavailableError(PROVIDER, str(resp.status_code))

        try:
            return CoinGeckoCoin.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError(PROVIDER, f"unexpected body for {coin_id}") from e
