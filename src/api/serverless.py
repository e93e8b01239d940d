"""Serverless entry point (Netlify/Lambda style) over the shared analyzer.

Each invocation builds its own analyzer and event loop, runs one
analysis and returns ``{statusCode, headers, body}``.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

from config.settings import settings
from src.parsers.analyzer import AnalysisResult, TokenAnalyzer

RESPONSE_HEADERS = {
    "Content-Type": "application/json; charset=utf-8",
    "Cache-Control": "no-store",
}


async def _run(chain: str, mint: str) -> AnalysisResult:
    async with TokenAnalyzer.from_settings(settings) as analyzer:
        return await analyzer.analyze(chain, mint)


def handler(event: dict[str, Any] | None, context: Any = None) -> dict[str, Any]:
    params = (event or {}).get("queryStringParameters") or {}
    chain = params.get("chain") or "solana"
    mint = params.get("mint") or ""

    result = asyncio.run(_run(chain, mint))
    return {
        "statusCode": result.status,
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(result.body),
    }
