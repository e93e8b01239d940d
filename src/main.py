"""Entry point for the token analyzer HTTP server."""

import asyncio
import contextlib
import signal

from loguru import logger

from config.settings import settings
from src.api.server import run_server
from src.utils.logger import setup_logger


async def main() -> None:
    setup_logger(json_logs=settings.json_logs, level=settings.log_level, log_to_file=settings.log_to_file)
    logger.info("Starting token analyzer...")

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    def _on_signal() -> None:
        logger.info("Shutdown signal received")
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _on_signal)

    server_task = asyncio.create_task(run_server())
    stop_task = asyncio.create_task(stop.wait())
    await asyncio.wait({server_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)

    for task in (server_task, stop_task):
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
