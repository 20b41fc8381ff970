"""Logging setup for command-line use. Library modules only ever call getLogger."""

from __future__ import annotations

import logging
from typing import Optional

from kiacha.config import LoggingConfig


def setup_logging(config: Optional[LoggingConfig] = None, level: Optional[str] = None) -> None:
    """Configure root logging from a LoggingConfig (level override wins)."""
    config = config or LoggingConfig()
    level_name = (level or config.level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=config.format,
    )
