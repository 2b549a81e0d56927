"""Loguru sinks for the rebalancer API: console plus a rotating daily file."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from config.settings import Settings, settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def log_file_pattern(log_dir: str | Path) -> str:
    return str(Path(log_dir) / "rebalancer_{time:YYYY-MM-DD}.log")


def setup_logger(cfg: Settings | None = None) -> None:
    """Replace loguru's default sink with the configured ones.

    Console level follows ``log_level``; the file sink always keeps DEBUG so
    skipped holdings and persistence failures can be inspected afterwards.
    An empty ``log_dir`` disables the file sink.
    """
    cfg = cfg or settings
    console_level = cfg.log_level.upper()
    logger.remove()

    if cfg.json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    if not cfg.log_dir:
        return
    logger.add(
        log_file_pattern(cfg.log_dir),
        rotation=cfg.log_rotation,
        retention=cfg.log_retention,
        compression="gz",
        level="DEBUG",
        serialize=cfg.json_logs,
    )
