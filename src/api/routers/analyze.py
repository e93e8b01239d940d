"""Token analysis endpoint: thin adapter over TokenAnalyzer.analyze()."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.api.dependencies import get_analyzer, limiter
from src.parsers.analyzer import TokenAnalyzer

router = APIRouter(prefix="/api", tags=["analyze"])


@router.get("/analyze")
@limiter.limit(settings.analyze_rate_limit)
async def analyze_token(
    request: Request,
    chain: str = Query("solana"),
    mint: str = Query(""),
    analyzer: TokenAnalyzer = Depends(get_analyzer),
) -> JSONResponse:
    """Aggregate market data + risk signals for one token.

    200 with the full report, 400 on invalid input, 500 when a mandatory
    provider fails. Error bodies are ``{"error": ..., "details"?: ...}``.
    """
    result = await analyzer.analyze(chain, mint)
    return JSONResponse(status_code=result.status, content=result.body)
