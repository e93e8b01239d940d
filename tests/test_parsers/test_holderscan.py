"""Tests for HolderScan holder counts."""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.parsers.holderscan.client import HolderScanClient, extract_holder_count


@pytest.fixture
def client() -> HolderScanClient:
    c = HolderScanClient(api_key="hs-key")
    c._client = AsyncMock()
    return c


class TestExtractHolderCount:
    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"total": 1234}, 1234),
            ({"holder_count": "77"}, 77),
            ({"holderCount": 5}, 5),
            ({"totalHolders": 0}, 0),
            ({"data": {"total": 42}}, 42),
            ({"holders": [{"address": "x"}], "total": 900}, 900),
            ({"holders": 31}, 31),
        ],
    )
    def test_field_variants(self, payload, expected) -> None:
        assert extract_holder_count(payload) == expected

    def test_top_level_wins_over_nested(self) -> None:
        assert extract_holder_count({"total": 1, "data": {"total": 2}}) == 1

    @pytest.mark.parametrize("payload", [{}, {"holders": []}, {"total": -5}, {"total": "n/a"}, [], None, "x"])
    def test_unknown(self, payload) -> None:
        assert extract_holder_count(payload) is None


class TestHolderScanClient:
    @pytest.mark.asyncio
    async def test_fetches_count(self, client, http_response, sol_mint) -> None:
        client._client.get = AsyncMock(return_value=http_response(json_data={"holders": [], "total": 3500}))

        assert await client.get_holder_count(sol_mint) == 3500
        client._client.get.assert_awaited_once_with(f"/solana/tokens/{sol_mint}/holders", params={"limit": 1})

    @pytest.mark.asyncio
    async def test_unconfigured_skips_request(self, sol_mint) -> None:
        c = HolderScanClient(api_key="")
        c._client = AsyncMock()

        assert await c.get_holder_count(sol_mint) is None
        c._client.get.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 404, 429, 500])
    async def test_non_200_is_unknown(self, client, http_response, sol_mint, status) -> None:
        client._client.get = AsyncMock(return_value=http_response(status_code=status))
        assert await client.get_holder_count(sol_mint) is None

    @pytest.mark.asyncio
    async def test_network_error_is_unknown(self, client, sol_mint) -> None:
        client._client.get = AsyncMock(side_effect=httpx.ConnectTimeout("slow"))
        assert await client.get_holder_count(sol_mint) is None

    @pytest.mark.asyncio
    async def test_non_json_is_unknown(self, client, http_response, sol_mint) -> None:
        client._client.get = AsyncMock(return_value=http_response(json_error=True))
        assert await client.get_holder_count(sol_mint) is None
