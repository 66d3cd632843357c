import logging
from os import path
from typing import Optional

from mongotrace.internal.logger import MongotraceFormatter
from mongotrace.internal.utils.formats import asbool
from mongotrace.settings._core import get_config


DEFAULT_FILE_SIZE_BYTES = 15 << 20  # 15 MB


def configure_mongotrace_logger():
    # type: () -> None
    """Configures mongotrace log levels and file paths.

    Customization is possible with the environment variables:
        ``MONGOTRACE_TRACE_DEBUG``, ``MONGOTRACE_TRACE_LOG_FILE_LEVEL``, and ``MONGOTRACE_TRACE_LOG_FILE``

    By default, when none of the settings have been changed, mongotrace loggers
        inherit from the root logger in the logging module and no logs are written to a file.

    When MONGOTRACE_TRACE_DEBUG has been enabled:
        - Logs are propagated up so that they appear in the application logs if a file path wasn't provided
        - Logs are routed to a file when MONGOTRACE_TRACE_LOG_FILE is specified, using the log level in
          MONGOTRACE_TRACE_LOG_FILE_LEVEL.
        - Child loggers inherit from the parent mongotrace logger
    """
    mongotrace_logger = logging.getLogger("mongotrace")
    if get_config("MONGOTRACE_TRACE_LOG_STREAM_HANDLER", True, asbool):
        handler = logging.StreamHandler()
        handler.setFormatter(MongotraceFormatter())
        mongotrace_logger.addHandler(handler)

    _configure_mongotrace_debug_logger(mongotrace_logger)
    _configure_mongotrace_file_logger(mongotrace_logger)


def _configure_mongotrace_debug_logger(logger):
    if get_config("MONGOTRACE_TRACE_DEBUG", False, asbool):
        logger.setLevel(logging.DEBUG)


def _configure_mongotrace_file_logger(logger):
    log_file_level = get_config("MONGOTRACE_TRACE_LOG_FILE_LEVEL", "DEBUG").upper()
    try:
        file_log_level_value = getattr(logging, log_file_level)
    except AttributeError:
        raise ValueError(
            "MONGOTRACE_TRACE_LOG_FILE_LEVEL is invalid. Log level must be CRITICAL/ERROR/WARNING/INFO/DEBUG.",
            log_file_level,
        )
    max_file_bytes = get_config("MONGOTRACE_TRACE_LOG_FILE_SIZE_BYTES", DEFAULT_FILE_SIZE_BYTES, int)
    log_path = get_config("MONGOTRACE_TRACE_LOG_FILE")
    _add_file_handler(logger=logger, log_path=log_path, log_level=file_log_level_value, max_file_bytes=max_file_bytes)


def _add_file_handler(
    logger: logging.Logger,
    log_path: Optional[str],
    log_level: int,
    max_file_bytes: int = DEFAULT_FILE_SIZE_BYTES,
):
    file_handler = None
    if log_path is not None:
        log_path = path.abspath(log_path)
        from logging.handlers import RotatingFileHandler

        file_handler = RotatingFileHandler(filename=log_path, mode="a", maxBytes=max_file_bytes, backupCount=1)
        log_format = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s:%(lineno)d] - %(message)s"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)
        logger.debug("mongotrace logs will be routed to %s", log_path)
    return file_handler
