# gst_compliance/core/logging_config.py

import logging
import sys

from loguru import logger

from gst_compliance.core.config import settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)

# stdlib loggers owned by libraries, and the floor they log at
_LIBRARY_LEVELS = {
    "uvicorn": None,
    "uvicorn.error": None,
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib log records (domain services, repositories, uvicorn) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(logger_name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str | None = None) -> None:
    """
    Configure loguru as the only sink: colored console lines locally,
    one JSON object per line when ``LOG_JSON`` is set.
    """
    level = (level or settings.LOG_LEVEL).upper()

    logger.remove()
    logger.configure(extra={"app": settings.APP_NAME, "environment": settings.ENVIRONMENT})
    if settings.LOG_JSON:
        logger.add(sys.stdout, level=level, serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stdout,
            format=_CONSOLE_FORMAT,
            level=level,
            colorize=True,
            backtrace=False,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.getLevelName(level), force=True)
    for name, floor in _LIBRARY_LEVELS.items():
        lib_logger = logging.getLogger(name)
        lib_logger.handlers = [InterceptHandler()]
        lib_logger.propagate = False
        if floor is not None:
            lib_logger.setLevel(floor)
