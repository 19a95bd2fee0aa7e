import logging
import sys

import structlog

from catalog.config import settings


def configure_logging(level: str = None, json_logs: bool = None) -> None:
    """
    Route stdlib logging and structlog through the same processor chain.
    Called once from the app lifespan; safe to call again (tests do).
    """
    level = (level or settings.LOG_LEVEL).upper()
    json_logs = settings.LOG_JSON if json_logs is None else json_logs

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
