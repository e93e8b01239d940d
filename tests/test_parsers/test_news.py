"""Tests for the Google News RSS parser and client."""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.parsers.news.client import NewsClient, build_news_query, decode_xml_text, parse_news_rss

FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
<title>"USDC" - Google News</title>
<item>
  <title><![CDATA[Circle &amp; partners expand USDC]]></title>
  <link>https://news.example.com/a?x=1&amp;y=2</link>
  <pubDate>Mon, 02 Jun 2025 14:30:00 GMT</pubDate>
  <source url="https://example.com">Example Wire</source>
</item>
<item>
  <title>No source here</title>
  <link>https://news.example.com/b</link>
  <pubDate>not a date</pubDate>
</item>
<item><title>Third</title><link>https://news.example.com/c</link></item>
</channel></rss>"""


class TestQuery:
    def test_bitcoin_query(self) -> None:
        assert build_news_query("bitcoin") == "Bitcoin OR BTC crypto token when:7d"

    def test_token_query_prefers_name(self) -> None:
        query = build_news_query("solana", mint="Mint111", symbol="USDC", name="USD Coin")
        assert query == "USD Coin USDC crypto token when:7d"

    def test_token_query_falls_back_to_mint(self) -> None:
        assert build_news_query("ethereum", mint="0xabc") == "0xabc crypto token when:7d"


class TestParse:
    def test_items(self) -> None:
        items = parse_news_rss(FEED)

        assert len(items) == 3
        first = items[0]
        assert first.title == "Circle & partners expand USDC"
        assert first.url == "https://news.example.com/a?x=1&y=2"
        assert first.publishedAt == "2025-06-02T14:30:00.000Z"
        assert first.source == "Example Wire"

    def test_defaults_for_missing_fields(self) -> None:
        second, third = parse_news_rss(FEED)[1:]
        assert second.source == "Unknown"
        assert second.publishedAt is None
        assert third.publishedAt is None

    def test_max_items(self) -> None:
        assert len(parse_news_rss(FEED, max_items=2)) == 2

    def test_garbage_is_empty(self) -> None:
        assert parse_news_rss("") == []
        assert parse_news_rss("<html>blocked</html>") == []

    def test_decode_xml_text(self) -> None:
        assert decode_xml_text("<![CDATA[a &lt;b&gt;]]>") == "a <b>"
        assert decode_xml_text("") == ""


class TestNewsClient:
    @pytest.mark.asyncio
    async def test_fetches_feed(self, http_response) -> None:
        client = NewsClient(max_items=1)
        client._client = AsyncMock()
        client._client.get = AsyncMock(return_value=http_response(text=FEED))

        items = await client.get_news("USD Coin USDC crypto token when:7d")

        assert [i.source for i in items] == ["Example Wire"]
        params = client._client.get.await_args.kwargs["params"]
        assert params == {"q": "USD Coin USDC crypto token when:7d", "hl": "en-US", "gl": "US", "ceid": "US:en"}

    @pytest.mark.asyncio
    async def test_failures_are_empty(self, http_response) -> None:
        client = NewsClient()
        client._client = AsyncMock()
        client._client.get = AsyncMock(side_effect=[http_response(status_code=503), httpx.ConnectError("down")])

        assert await client.get_news("q") == []
        assert await client.get_news("q") == []
