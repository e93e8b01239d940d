import httpx
from loguru import logger
from pydantic import ValidationError

from src.parsers.dexscreener.models import DexScreenerPair
from src.parsers.exceptions import UpstreamUnavailableError

BASE_URL = "https://api.dexscreener.com"
PROVIDER = "DexScreener"


class DexScreenerClient:
    """Async REST client for DexScreener public API (no auth required).

    Mandatory provider: HTTP and network failures raise, a single attempt per call.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get_token_pairs(self, token_address: str) -> list[DexScreenerPair]:
        """Get all known pairs for a token on any chain.

        Raises UpstreamUnavailableError on non-2xx status or network failure.
        A body of unexpected shape yields an empty list.
        """
        try:
            response = await self._client.get(f"/latest/dex/tokens/{token_address}")
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(PROVIDER, f"{type(e).__name__}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise UpstreamUnavailableError(PROVIDER, str(response.status_code))

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"[DEXSCREENER] Non-JSON body for {token_address[:12]}")
            return []

        if isinstance(data, list):
            raw_pairs = data
        elif isinstance(data, dict):
            raw_pairs = data.get("pairs") or []
        else:
            raw_pairs = []
        if not isinstance(raw_pairs, list):
            return []

        pairs: list[DexScreenerPair] = []
        for raw in raw_pairs:
            if not isinstance(raw, dict):
                continue
            try:
                pairs.append(DexScreenerPair.model_validate(raw))
            except ValidationError as e:
                logger.debug(f"[DEXSCREENER] Skipping malformed pair: {e.error_count()} errors")
        return pairs

    async def close(self) -> None:
        await self._client.aclose()
