"""Health check: reports which optional providers are configured."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.dependencies import get_analyzer
from src.parsers.analyzer import TokenAnalyzer

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    sources: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(analyzer: TokenAnalyzer = Depends(get_analyzer)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        sources={
            "helius": analyzer.helius.configured,
            "holderScan": analyzer.holderscan.configured,
        },
    )
