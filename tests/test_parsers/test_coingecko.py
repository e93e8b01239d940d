"""Tests for the CoinGecko client."""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.parsers.coingecko.client import COIN_PARAMS, CoinGeckoClient
from src.parsers.exceptions import MalformedResponseError, UpstreamError, UpstreamUnavailableError

BITCOIN = {
    "id": "bitcoin",
    "symbol": "btc",
    "name": "Bitcoin",
    "genesis_date": "2009-01-03",
    "market_data": {
        "current_price": {"usd": 67000.5, "eur": 61000},
        "market_cap": {"usd": 1_320_000_000_000},
        "total_volume": {"usd": 25_000_000_000},
        "price_change_percentage_24h": -1.25,
    },
}


@pytest.fixture
def client() -> CoinGeckoClient:
    c = CoinGeckoClient()
    c._client = AsyncMock()
    return c


class TestCoinGeckoClient:
    @pytest.mark.asyncio
    async def test_get_coin(self, client, http_response) -> None:
        client._client.get = AsyncMock(return_value=http_response(json_data=BITCOIN))

        coin = await client.get_coin("bitcoin")

        assert coin.genesis_date == "2009-01-03"
        assert coin.market_data.current_price.usd == 67000.5
        assert coin.market_data.price_change_percentage_24h == -1.25
        client._client.get.assert_awaited_once_with("/coins/bitcoin", params=COIN_PARAMS)

    @pytest.mark.asyncio
    async def test_http_error_raises(self, client, http_response) -> None:
        client._client.get = AsyncMock(return_value=http_response(status_code=429))
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await client.get_coin("bitcoin")
        assert exc_info.value.provider == "CoinGecko"

    @pytest.mark.asyncio
    async def test_network_error_raises(self, client) -> None:
        client._client.get = AsyncMock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(UpstreamError):
            await client.get_coin("bitcoin")

    @pytest.mark.asyncio
    async def test_non_json_raises_malformed(self, client, http_response) -> None:
        client._client.get = AsyncMock(return_value=http_response(json_error=True))
        with pytest.raises(MalformedResponseError):
            await client.get_coin("bitcoin")

    @pytest.mark.asyncio
    async def test_missing_market_data_is_allowed(self, client, http_response) -> None:
        client._client.get = AsyncMock(return_value=http_response(json_data={"id": "bitcoin"}))
        coin = await client.get_coin("bitcoin")
        assert coin.market_data is None
