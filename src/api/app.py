"""FastAPI application factory for the token analyzer."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from src.api.dependencies import limiter
from src.api.middleware import SecurityHeadersMiddleware
from src.parsers.analyzer import TokenAnalyzer

PUBLIC_DIR = Path(__file__).resolve().parent.parent.parent / "public"


def create_app(analyzer: TokenAnalyzer | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    A pre-built analyzer can be injected (tests); otherwise one is created
    from settings on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = analyzer is None
        app.state.analyzer = analyzer or TokenAnalyzer.from_settings(settings)
        logger.info(
            f"Analyzer ready (helius={'on' if settings.helius_api_key else 'off'}, "
            f"holderscan={'on' if settings.holderscan_api_key else 'off'})"
        )
        try:
            yield
        finally:
            if owned:
                await app.state.analyzer.close()

    app = FastAPI(
        title="Token Scope API",
        version="0.1.0",
        docs_url="/api/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # CORS only for browser clients served from another origin
    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=False,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    from src.api.routers.analyze import router as analyze_router
    from src.api.routers.health import router as health_router

    app.include_router(analyze_router)
    app.include_router(health_router)

    # Static frontend, if shipped alongside
    if PUBLIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(PUBLIC_DIR), html=True), name="public")

    return app
