"""Entry point for the rebalancer API."""

import asyncio

from loguru import logger

from config.settings import settings
from src.api.server import run_api_server
from src.db.database import engine
from src.utils.logger import setup_logger


async def main() -> None:
    setup_logger(settings)
    logger.info("Starting portfolio rebalancer API...")

    try:
        await run_api_server(settings)
    finally:
        await engine.dispose()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
