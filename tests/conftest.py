"""Shared test fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from src.parsers.dexscreener.models import DexScreenerPair

SOL_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
EVM_TOKEN = "0x6982508145454ce325ddbe47a25d4ec3d2311933"


@pytest.fixture
def sol_mint() -> str:
    return SOL_MINT


@pytest.fixture
def evm_token() -> str:
    return EVM_TOKEN


@pytest.fixture
def raw_pair() -> Callable[..., dict[str, Any]]:
    """Factory for DexScreener pair payloads with overridable fields."""

    def _make(**overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "chainId": "solana",
            "dexId": "raydium",
            "url": "https://dexscreener.com/solana/pairaddr111",
            "pairAddress": "pairaddr111",
            "baseToken": {"address": SOL_MINT, "name": "USD Coin", "symbol": "USDC"},
            "quoteToken": {"address": "So11111111111111111111111111111111111111112", "name": "Wrapped SOL", "symbol": "SOL"},
            "priceUsd": "1.0001",
            "priceChange": {"m5": 0.01, "h1": -0.02, "h6": 0.1, "h24": 0.05},
            "volume": {"m5": 1000, "h1": 12000, "h6": 70000, "h24": 250000},
            "txns": {
                "m5": {"buys": 3, "sells": 2},
                "h1": {"buys": 40, "sells": 35},
                "h24": {"buys": 900, "sells": 850},
            },
            "liquidity": {"usd": 1_500_000, "base": 750000, "quote": 5000},
            "fdv": 2_000_000_000,
            "marketCap": 1_900_000_000,
            "pairCreatedAt": 1_700_000_000_000,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_pair(raw_pair: Callable[..., dict[str, Any]]) -> Callable[..., DexScreenerPair]:
    def _make(**overrides: Any) -> DexScreenerPair:
        return DexScreenerPair.model_validate(raw_pair(**overrides))

    return _make


@pytest.fixture
def http_response() -> Callable[..., MagicMock]:
    """Factory for mocked httpx responses."""

    def _make(status_code: int = 200, json_data: Any = None, text: str = "", json_error: bool = False) -> MagicMock:
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = text
        if json_error:
            resp.json.side_effect = ValueError("not json")
        else:
            resp.json.return_value = json_data
        return resp

    return _make
