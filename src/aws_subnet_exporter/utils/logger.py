"""
Logging setup built on loguru.

Every module obtains its logger through get_logger(__name__). Standard
library logging (uvicorn, botocore) is intercepted and forwarded to loguru
so all output shares one format and level.

Usage:
    from aws_subnet_exporter.utils.logger import configure_logging, get_logger

    configure_logging(LogLevel.DEBUG)
    logger = get_logger(__name__)
"""

import inspect
import logging
import sys

from loguru import logger as _logger

from aws_subnet_exporter.models.enums import LogLevel

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_LEVEL_MAP = {
    LogLevel.FULL: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
}

# Default so loggers bound before configure_logging() still format
_logger.configure(extra={"name": "aws_subnet_exporter"})


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller outside the logging module for correct depth
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        _logger.bind(name=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def configure_logging(level: LogLevel = LogLevel.INFO) -> None:
    """
    Configure loguru output and route stdlib logging into it.

    Args:
        level: Verbosity level. FULL also enables backtraces with variables.
    """
    loguru_level = _LEVEL_MAP.get(level, "INFO")
    full = level == LogLevel.FULL

    _logger.remove()
    _logger.add(
        sys.stderr,
        level=loguru_level,
        format=LOG_FORMAT,
        backtrace=full,
        diagnose=full,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    # botocore is very chatty below WARNING unless explicitly tracing
    if not full:
        for name in ("botocore", "boto3", "urllib3"):
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str):
    """Get a loguru logger bound to a module name."""
    return _logger.bind(name=name)
