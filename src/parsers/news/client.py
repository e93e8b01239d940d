"""Google News RSS client: recent headlines for a token.

Best-effort: every failure yields an empty list. Feed items are pulled out
with regular expressions instead of an XML parser because search feeds
regularly carry escaped markup and stray entities that break strict parsing.
"""

import html
import re
from email.utils import parsedate_to_datetime

import httpx
from loguru import logger

from src.parsers.coerce import to_iso
from src.parsers.news.models import NewsItem

BASE_URL = "https://news.google.com/rss/search"
DEFAULT_MAX_ITEMS = 6
WINDOW = "when:7d"

_ITEM_RE = re.compile(r"<item>[\s\S]*?</item>", re.IGNORECASE)
_TITLE_RE = re.compile(r"<title>([\s\S]*?)</title>", re.IGNORECASE)
_LINK_RE = re.compile(r"<link>([\s\S]*?)</link>", re.IGNORECASE)
_PUBDATE_RE = re.compile(r"<pubDate>([\s\S]*?)</pubDate>", re.IGNORECASE)
_SOURCE_RE = re.compile(r"<source[^>]*>([\s\S]*?)</source>", re.IGNORECASE)
_CDATA_RE = re.compile(r"<!\[CDATA\[([\s\S]*?)\]\]>")


def build_news_query(chain: str, *, mint: str = "", symbol: str | None = None, name: str | None = None) -> str:
    """Search query for a token; the native asset gets a fixed query."""
    if chain == "bitcoin":
        base = "Bitcoin OR BTC"
    else:
        base = f"{name or symbol or mint} {symbol or ''}".strip()
    return f"{base} crypto token {WINDOW}"


def decode_xml_text(text: str) -> str:
    """Unwrap CDATA sections and unescape entities."""
    if not text:
        return ""
    return html.unescape(_CDATA_RE.sub(r"\1", text))


def _first_match(source: str, pattern: re.Pattern[str]) -> str:
    match = pattern.search(source)
    return decode_xml_text(match.group(1)).strip() if match else ""


def _parse_pub_date(value: str) -> str | None:
    if not value:
        return None
    try:
        return to_iso(parsedate_to_datetime(value))
    except (TypeError, ValueError):
        return None


def parse_news_rss(xml: str, max_items: int = DEFAULT_MAX_ITEMS) -> list[NewsItem]:
    """Parse up to ``max_items`` items out of an RSS document."""
    items = _ITEM_RE.findall(xml or "")
    return [
        NewsItem(
            title=_first_match(item, _TITLE_RE),
            url=_first_match(item, _LINK_RE),
            publishedAt=_parse_pub_date(_first_match(item, _PUBDATE_RE)),
            source=_first_match(item, _SOURCE_RE) or "Unknown",
        )
        for item in items[:max_items]
    ]


class NewsClient:
    """Async client for the Google News RSS search feed (no auth)."""

    def __init__(self, timeout: float = 10.0, max_items: int = DEFAULT_MAX_ITEMS) -> None:
        self._max_items = max_items
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/rss+xml"},
            follow_redirects=True,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_news(self, query: str) -> list[NewsItem]:
        params = {"q": query, "hl": "en-US", "gl": "US", "ceid": "US:en"}
        try:
            resp = await self._client.get(BASE_URL, params=params)
        except httpx.RequestError as e:
            logger.debug(f"[NEWS] Request failed: {type(e).__name__}: {e}")
            return []

        if resp.status_code != 200:
            logger.debug(f"[NEWS] HTTP {resp.status_code} for query {query!r}")
            return []

        return parse_news_rss(resp.text, self._max_items)
