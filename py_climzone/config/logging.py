"""structlog setup for hosts embedding the zone engine."""

import logging
from typing import Optional

import structlog

from .settings import Settings, settings as default_settings


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Library modules only call ``structlog.get_logger()``; the host decides
    when (and whether) to call this.

    Args:
        config: Settings to read ``log_level`` and ``log_format`` from
    """
    config = config or default_settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    if config.log_format == "plain":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

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
