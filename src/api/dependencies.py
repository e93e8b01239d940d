"""FastAPI dependencies: shared analyzer and rate limiter."""

from __future__ import annotations

from fastapi import HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.parsers.analyzer import TokenAnalyzer

# Rate limiter (shared instance)
limiter = Limiter(key_func=get_remote_address)


def get_analyzer(request: Request) -> TokenAnalyzer:
    """Return the analyzer created in the app lifespan."""
    analyzer = getattr(request.app.state, "analyzer", None)
    if analyzer is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Analyzer not ready")
    return analyzer
