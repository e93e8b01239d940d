"""HolderScan API client: total holder count for Solana tokens."""

from typing import Any

import httpx
from loguru import logger

from src.parsers.coerce import parse_int

BASE_URL = "https://api.holderscan.com/v0"

# Field names seen across HolderScan response versions, checked in order
HOLDER_COUNT_FIELDS = ("total", "holder_count", "holderCount", "totalHolders", "holders")


class HolderScanClient:
    """Async HTTP client for HolderScan (API key required, optional provider)."""

    def __init__(self, api_key: str = "", timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=timeout,
            headers={"X-API-KEY": api_key, "Accept": "application/json"},
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def close(self) -> None:
        await self._client.aclose()

    async def get_holder_count(self, mint: str) -> int | None:
        """Return the total holder count, or None when unknown."""
        if not self.configured:
            return None

        try:
            resp = await self._client.get(f"/solana/tokens/{mint}/holders", params={"limit": 1})
        except httpx.RequestError as e:
            logger.warning(f"[HOLDERSCAN] Request failed for {mint[:12]}: {type(e).__name__}: {e}")
            return None

        if resp.status_code != 200:
            logger.debug(f"[HOLDERSCAN] HTTP {resp.status_code} for {mint[:12]}")
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.debug(f"[HOLDERSCAN] Non-JSON body for {mint[:12]}")
            return None

        count = extract_holder_count(data)
        if count is None:
            logger.debug(f"[HOLDERSCAN] No holder count field for {mint[:12]}")
        return count


def extract_holder_count(data: Any) -> int | None:
    """Find the holder count in a response, top level first, then under ``data``."""
    for container in (data, data.get("data") if isinstance(data, dict) else None):
        if not isinstance(container, dict):
            continue
        for field in HOLDER_COUNT_FIELDS:
            value = container.get(field)
            # "holders" is also the name of the holder list itself
            if isinstance(value, (list, dict)):
                continue
            count = parse_int(value)
            if count is not None and count >= 0:
                return count
    return None
