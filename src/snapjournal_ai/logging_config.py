"""Centralized logging configuration for the application."""

import logging
import sys

from snapjournal_ai.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Settings | None = None) -> None:
    """Configure the root logger from settings.

    Args:
        config: Settings instance, uses the global settings if None
    """
    config = config or default_settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str, config: Settings | None = None) -> logging.Logger:
    """Get a logger at the configured level.

    Args:
        name: Logger name (usually __name__)
        config: Settings instance, uses the global settings if None

    Returns:
        Configured logger instance
    """
    config = config or default_settings
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.log_level.upper()))
    return logger
