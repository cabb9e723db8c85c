"""Loguru configuration for the profit story app."""

import sys
from pathlib import Path

from loguru import logger


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """Configure Loguru sinks: colourised console, plus a rotating file when log_dir is set."""
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level:<8}</level> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_dir / "story_{time:YYYY-MM-DD}.log",
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="30 days",
        encoding="utf-8",
    )
