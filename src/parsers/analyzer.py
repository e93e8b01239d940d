"""Token analysis orchestrator: transport-agnostic ``analyze(chain, address)``.

Fans out to the market-data providers, picks the canonical pair, derives
signals and assembles the report. Both the FastAPI route and the serverless
handler call ``TokenAnalyzer.analyze`` and only translate its result.

Token chains run in two concurrent batches:
  1. DexScreener pairs (+ HolderScan, Helius authorities, Helius earliest
     activity for Solana only; skipped entirely on other chains)
  2. GeckoTerminal candles + news, both of which need the selected pair
"""

import asyncio
import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

from loguru import logger

from config.settings import Settings
from src.models.report import (
    EVM_CHAINS,
    AnalysisReport,
    AnalysisRequest,
    Chain,
    ChartLinks,
    DexPairSummary,
    MarketSignals,
    PriceChangeByWindow,
    SourceFlags,
    TokenInfo,
)
from src.parsers.coerce import iso_from_millis, to_iso
from src.parsers.coingecko.client import CoinGeckoClient
from src.parsers.dexscreener.client import DexScreenerClient
from src.parsers.dexscreener.models import DexScreenerPair
from src.parsers.exceptions import InvalidInputError, UpstreamError
from src.parsers.geckoterminal.client import GeckoTerminalClient
from src.parsers.helius.client import HeliusClient
from src.parsers.helius.models import MintAuthorities
from src.parsers.holderscan.client import HolderScanClient
from src.parsers.news.client import NewsClient, build_news_query
from src.parsers.pair_selector import pair_liquidity_usd, select_best_pair
from src.parsers.signals import assess_risk, compute_market_signals, summarize_candles

SOLANA_MINT_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

MSG_BITCOIN_ADDRESS = "Bitcoin does not use token contracts. Leave the address empty to fetch BTC."
MSG_BAD_SOLANA = "Please provide a valid Solana mint address."
MSG_BAD_EVM = "Please provide a valid EVM token address."
MSG_ANALYZE_FAILED = "Failed to analyze this token right now."
MSG_BTC_FAILED = "Failed to fetch BTC market data."

DEXSCREENER_URL = "https://dexscreener.com"


@dataclass
class AnalysisResult:
    """HTTP-agnostic outcome: status code + JSON-serializable body."""

    status: int
    body: dict[str, Any] = field(default_factory=dict)


def validate_request(chain: str | None, address: str | None) -> AnalysisRequest:
    """Normalize and validate the chain/address pair.

    Raises InvalidInputError with a user-facing message.
    """
    chain_id = (chain or Chain.SOLANA.value).strip().lower()
    address = (address or "").strip()

    try:
        parsed_chain = Chain(chain_id)
    except ValueError:
        raise InvalidInputError(f"Unsupported chain: {chain_id}") from None

    if parsed_chain is Chain.BITCOIN:
        if address:
            raise InvalidInputError(MSG_BITCOIN_ADDRESS)
    elif parsed_chain is Chain.SOLANA:
        if not SOLANA_MINT_RE.match(address):
            raise InvalidInputError(MSG_BAD_SOLANA)
    elif parsed_chain in EVM_CHAINS and not EVM_ADDRESS_RE.match(address):
        raise InvalidInputError(MSG_BAD_EVM)

    return AnalysisRequest(chain=parsed_chain, address=address)


def build_chart_links(pair: DexScreenerPair | None) -> ChartLinks:
    if pair is None or not pair.chainId or not pair.pairAddress:
        return ChartLinks()
    dex_url = f"{DEXSCREENER_URL}/{pair.chainId}/{pair.pairAddress}"
    return ChartLinks(dexUrl=dex_url, embedUrl=f"{dex_url}?embed=1&theme=light")


def summarize_pair(pair: DexScreenerPair | None) -> DexPairSummary | None:
    if pair is None:
        return None
    return DexPairSummary(
        dexId=pair.dexId,
        url=pair.url,
        chainId=pair.chainId,
        pairAddress=pair.pairAddress,
        liquidityUsd=pair_liquidity_usd(pair),
        baseToken=TokenInfo.model_validate(pair.baseToken.model_dump()) if pair.baseToken else None,
        quoteToken=TokenInfo.model_validate(pair.quoteToken.model_dump()) if pair.quoteToken else None,
        pairCreatedAt=iso_from_millis(pair.pairCreatedAt),
    )


def _genesis_iso(genesis_date: str | None) -> str | None:
    if not genesis_date:
        return None
    try:
        day = date.fromisoformat(genesis_date)
    except ValueError:
        return None
    return to_iso(datetime(day.year, day.month, day.day, tzinfo=UTC))


class TokenAnalyzer:
    """Owns the provider clients; one instance serves many requests.

    Nothing is written to instance state during ``analyze``.
    """

    def __init__(
        self,
        *,
        dexscreener: DexScreenerClient,
        helius: HeliusClient,
        holderscan: HolderScanClient,
        geckoterminal: GeckoTerminalClient,
        news: NewsClient,
        coingecko: CoinGeckoClient,
    ) -> None:
        self.dexscreener = dexscreener
        self.helius = helius
        self.holderscan = holderscan
        self.geckoterminal = geckoterminal
        self.news = news
        self.coingecko = coingecko

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenAnalyzer":
        timeout = settings.http_timeout_sec
        return cls(
            dexscreener=DexScreenerClient(timeout=timeout),
            helius=HeliusClient(
                api_key=settings.helius_api_key,
                rpc_url=settings.helius_rpc_url,
                timeout=timeout,
            ),
            holderscan=HolderScanClient(api_key=settings.holderscan_api_key, timeout=timeout),
            geckoterminal=GeckoTerminalClient(timeout=timeout),
            news=NewsClient(timeout=timeout, max_items=settings.news_max_items),
            coingecko=CoinGeckoClient(timeout=timeout),
        )

    async def close(self) -> None:
        await asyncio.gather(
            self.dexscreener.close(),
            self.helius.close(),
            self.holderscan.close(),
            self.geckoterminal.close(),
            self.news.close(),
            self.coingecko.close(),
        )

    async def __aenter__(self) -> "TokenAnalyzer":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def analyze(self, chain: str | None, address: str | None) -> AnalysisResult:
        """Validate, fetch, derive and assemble. Never raises.

        400 only for invalid input, 500 only when a mandatory provider fails.
        """
        try:
            request = validate_request(chain, address)
        except InvalidInputError as e:
            logger.debug(f"[ANALYZE] Rejected chain={chain!r} address={address!r}: {e}")
            return AnalysisResult(status=400, body={"error": str(e)})

        if request.chain is Chain.BITCOIN:
            failure_message = MSG_BTC_FAILED
        else:
            failure_message = MSG_ANALYZE_FAILED

        try:
            if request.chain is Chain.BITCOIN:
                report = await self._analyze_native(request)
            else:
                report = await self._analyze_token(request)
        except UpstreamError as e:
            logger.warning(f"[ANALYZE] {request.chain.value} {request.address[:12]}: {e}")
            return AnalysisResult(status=500, body={"error": failure_message, "details": str(e)})
        except Exception as e:
            logger.exception(f"[ANALYZE] Unexpected failure for {request.chain.value} {request.address[:12]}")
            return AnalysisResult(status=500, body={"error": failure_message, "details": str(e)})

        return AnalysisResult(status=200, body=report.model_dump(mode="json"))

    async def _analyze_native(self, request: AnalysisRequest) -> AnalysisReport:
        coin, news = await asyncio.gather(
            self.coingecko.get_coin("bitcoin"),
            self.news.get_news(build_news_query(request.chain.value, mint="BTC", symbol="BTC", name="Bitcoin")),
        )
        market = coin.market_data

        def _usd(value: Any) -> float | None:
            return value.usd if value is not None else None

        daily_change = market.price_change_percentage_24h if market else None
        return AnalysisReport(
            chain=request.chain,
            mint="BTC",
            priceUsd=_usd(market.current_price) if market else None,
            marketCapUsd=_usd(market.market_cap) if market else None,
            dailyChangePercent=daily_change,
            volume24hUsd=_usd(market.total_volume) if market else None,
            firstMintedAt=_genesis_iso(coin.genesis_date),
            market=MarketSignals(priceChangePercent=PriceChangeByWindow(h24=daily_change)),
            news=news,
            sources=SourceFlags(coinGecko=True, news=True),
        )

    async def _analyze_token(self, request: AnalysisRequest) -> AnalysisReport:
        chain = request.chain
        mint = request.address
        is_solana = chain is Chain.SOLANA

        # Batch 1: independent calls. Solana-only providers are not called elsewhere.
        pairs_task = self.dexscreener.get_token_pairs(mint)
        if is_solana:
            pairs, holders, authorities, earliest = await asyncio.gather(
                pairs_task,
                self.holderscan.get_holder_count(mint),
                self.helius.get_mint_authorities(mint),
                self.helius.get_earliest_activity(mint),
            )
        else:
            pairs = await pairs_task
            holders, authorities, earliest = None, MintAuthorities(), None

        best_pair = select_best_pair(pairs)
        logger.debug(
            f"[ANALYZE] {chain.value} {mint[:12]}: {len(pairs)} pairs, "
            f"best={best_pair.pairAddress[:12] if best_pair else None}"
        )

        # Batch 2: both need the selected pair
        symbol = best_pair.baseToken.symbol if best_pair and best_pair.baseToken else None
        name = best_pair.baseToken.name if best_pair and best_pair.baseToken else None
        candles, news = await asyncio.gather(
            self.geckoterminal.get_daily_candles(chain.value, best_pair.pairAddress if best_pair else None),
            self.news.get_news(build_news_query(chain.value, mint=mint, symbol=symbol, name=name)),
        )
        volumes = summarize_candles(candles)

        market_cap = None
        volume_24h = None
        price_change = None
        if best_pair is not None:
            market_cap = best_pair.fdv if best_pair.fdv is not None else best_pair.marketCap
            volume_24h = best_pair.volume.h24 if best_pair.volume else None
            price_change = best_pair.priceChange.h24 if best_pair.priceChange else None

        pair_created = iso_from_millis(best_pair.pairCreatedAt) if best_pair else None

        risk = assess_risk(
            best_pair,
            holder_count=holders,
            mint_authority=authorities.mint_authority,
            freeze_authority=authorities.freeze_authority,
        )
        market = compute_market_signals(
            best_pair,
            market_cap_usd=market_cap,
            volume_24h_usd=volume_24h,
            volume_7d_usd=volumes.volume7dUsd,
            volatility_7d_percent=volumes.volatility7dPercent,
        )

        return AnalysisReport(
            chain=chain,
            mint=mint,
            priceUsd=best_pair.priceUsd if best_pair else None,
            marketCapUsd=market_cap,
            dailyChangePercent=price_change,
            volume24hUsd=volume_24h,
            volume7dUsd=volumes.volume7dUsd,
            volume30dUsd=volumes.volume30dUsd,
            firstMintedAt=earliest or pair_created,
            holders=holders,
            mintAuthority=authorities.mint_authority,
            freezeAuthority=authorities.freeze_authority,
            dexPair=summarize_pair(best_pair),
            chart=build_chart_links(best_pair),
            risk=risk,
            market=market,
            news=news,
            sources=SourceFlags(
                dexScreener=True,
                holderScan=is_solana and self.holderscan.configured,
                helius=is_solana and self.helius.configured,
                geckoTerminal=bool(candles),
                news=True,
            ),
        )
