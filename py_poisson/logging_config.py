"""structlog setup shared by the library, demos and tests."""

import logging
import sys
from typing import Optional

import structlog

from .config import Settings, settings as default_settings


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Args:
        config: Settings to read ``log_level`` and ``log_format`` from,
            defaults to the module-level settings
    """
    config = config or default_settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger().setLevel(level)

    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
