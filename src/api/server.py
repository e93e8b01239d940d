"""uvicorn runner for the analyzer API."""

from __future__ import annotations

import uvicorn
from loguru import logger

from config.settings import settings


async def run_server() -> None:
    """Serve the FastAPI app until cancelled; signals are handled by ``src.main``."""
    from src.api.app import create_app

    server = uvicorn.Server(
        uvicorn.Config(
            app=create_app(),
            host=settings.host,
            port=settings.port,
            log_level="warning",
            loop="none",
        )
    )
    logger.info(f"Token analyzer listening on http://{settings.host}:{settings.port}")
    await server.serve()
