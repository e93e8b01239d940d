"""Helius RPC client: mint authorities and earliest on-chain activity for Solana."""

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.parsers.coerce import dig, iso_from_unix, parse_int
from src.parsers.helius.models import HeliusSignature, MintAuthorities

SIGNATURE_PAGE_SIZE = 1000
MAX_SIGNATURE_PAGES = 4


def _pubkey(value: Any) -> str | None:
    """Authority pubkey, or None when revoked or not a string."""
    return value if isinstance(value, str) and value else None


class HeliusClient:
    """Async JSON-RPC client for the Helius Solana endpoint.

    Optional provider: without an API key every method returns its default
    without touching the network, and failures degrade to the same default.
    """

    def __init__(self, api_key: str = "", rpc_url: str = "", timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._rpc_url = rpc_url or f"https://mainnet.helius-rpc.com/?api-key={api_key}"
        self._client = httpx.AsyncClient(timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def close(self) -> None:
        await self._client.aclose()

    async def _rpc(self, method: str, params: list[Any], request_id: str) -> Any | None:
        """POST one JSON-RPC call. Returns ``result`` or None on any failure."""
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        try:
            resp = await self._client.post(self._rpc_url, json=payload)
        except httpx.RequestError as e:
            logger.warning(f"[HELIUS] {method} failed: {type(e).__name__}: {e}")
            return None

        if resp.status_code != 200:
            logger.debug(f"[HELIUS] {method} HTTP {resp.status_code}")
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.debug(f"[HELIUS] {method} returned non-JSON body")
            return None
        if not isinstance(data, dict):
            return None
        if "error" in data:
            logger.debug(f"[HELIUS] {method} RPC error: {data['error']}")
            return None
        return data.get("result")

    async def get_mint_authorities(self, mint: str) -> MintAuthorities:
        """Read mint/freeze authority from the parsed SPL mint account."""
        if not self.configured:
            return MintAuthorities()

        result = await self._rpc("getAccountInfo", [mint, {"encoding": "jsonParsed"}], "mint-info")
        info = dig(result, "value", "data", "parsed", "info")
        if not isinstance(info, dict):
            return MintAuthorities()

        return MintAuthorities(
            mint_authority=_pubkey(info.get("mintAuthority")),
            freeze_authority=_pubkey(info.get("freezeAuthority")),
        )

    async def get_signatures_for_address(
        self, address: str, *, limit: int = SIGNATURE_PAGE_SIZE, before: str = "", page: int = 0
    ) -> list[HeliusSignature] | None:
        """Fetch one page of signatures, newest first. None on unsuccessful response."""
        params: dict[str, Any] = {"limit": min(limit, SIGNATURE_PAGE_SIZE)}
        if before:
            params["before"] = before

        result = await self._rpc("getSignaturesForAddress", [address, params], f"sig-page-{page}")
        if not isinstance(result, list):
            return None
        try:
            return [
                HeliusSignature(
                    signature=sig.get("signature") or "",
                    slot=parse_int(sig.get("slot"), 0),
                    timestamp=parse_int(sig.get("blockTime")),
                    err=sig.get("err"),
                )
                for sig in result
                if isinstance(sig, dict)
            ]
        except ValidationError as e:
            logger.debug(f"[HELIUS] Malformed signature page {page}: {e.error_count()} errors")
            return None

    async def get_earliest_activity(self, address: str) -> str | None:
        """Walk signature history backwards and return the oldest seen instant (ISO).

        Pages are strictly sequential: each cursor is the previous page's oldest
        signature. Stops after MAX_SIGNATURE_PAGES, on a short or empty page, when
        the oldest row has no signature to continue from, or on the first
        unsuccessful or malformed response (keeping what was already seen).
        """
        if not self.configured:
            return None

        before = ""
        oldest: HeliusSignature | None = None
        for page in range(MAX_SIGNATURE_PAGES):
            rows = await self.get_signatures_for_address(address, before=before, page=page)
            if not rows:
                break
            oldest = rows[-1]
            if len(rows) < SIGNATURE_PAGE_SIZE or not oldest.signature:
                break
            before = oldest.signature

        if oldest is None:
            return None
        return iso_from_unix(oldest.timestamp)
