"""
Common CLI setup: logging and settings resolution.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from lqwallet.settings import LiquidWalletSettings, get_settings, reset_settings


def setup_logging(level: str = "INFO") -> None:
    """
    Configure loguru logging with consistent format.

    Logs go to stderr so they never mix with command output on stdout.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level.upper(),
        colorize=True,
    )


def setup_cli(
    log_level: str | None = None,
    data_dir: Path | None = None,
) -> LiquidWalletSettings:
    """
    Common CLI setup: reset settings cache, configure logging, return settings.

    Log level priority: CLI argument > settings (env/config) > default "INFO"

    Args:
        log_level: Log level override from CLI (None means use settings)
        data_dir: Data directory override from CLI

    Returns:
        LiquidWalletSettings instance with all sources loaded
    """
    reset_settings()
    overrides = {"data_dir": data_dir} if data_dir is not None else {}
    settings = get_settings(**overrides)

    effective_log_level = log_level if log_level is not None else settings.logging.level
    setup_logging(effective_log_level)

    return settings
