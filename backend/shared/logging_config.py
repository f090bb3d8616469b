"""Loguru sink configuration."""

import sys
from typing import Optional

from loguru import logger

from .config import Settings, get_settings


def setup_logging(config: Optional[Settings] = None) -> None:
    """Replace the default loguru sink with the configured ones."""
    config = config or get_settings()
    
    logger.remove()
    logger.add(sys.stderr, level=config.log_level)
    
    if config.log_file:
        logger.add(
            str(config.log_file),
            rotation="1 day",
            retention="7 days",
            level=config.log_level,
        )
