"""API server — uvicorn driven from the caller's asyncio loop."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from loguru import logger

from config.settings import Settings, settings


def build_server(cfg: Settings | None = None, app: FastAPI | None = None) -> uvicorn.Server:
    """uvicorn server bound to ``api_host``/``api_port``.

    Access logging is left to ``RequestLoggingMiddleware``; uvicorn itself
    only reports warnings.
    """
    cfg = cfg or settings
    if app is None:
        from src.api.app import create_app

        app = create_app()
    config = uvicorn.Config(
        app=app,
        host=cfg.api_host,
        port=cfg.api_port,
        log_level="warning",
        access_log=False,
        loop="none",  # reuse the running loop
    )
    return uvicorn.Server(config)


async def run_api_server(cfg: Settings | None = None) -> None:
    cfg = cfg or settings
    server = build_server(cfg)
    logger.info(f"[API] Listening on http://{cfg.api_host}:{cfg.api_port}")
    await server.serve()
