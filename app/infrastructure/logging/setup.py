"""Structlog setup for the bot.

Log lines are rendered by structlog and handed to the standard library root
logger, which writes them to stderr and, when LOG_FILE is set, to a size
rotated log file that the admin `logs` command reads back.

    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("command_dispatched", command="ping")
"""

import inspect
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import Settings

LOG_LEVELS = ("trace", "debug", "info", "warn", "warning", "error")
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> BoundLogger:
    """Configure structlog and the root logger.

    Arguments left as None are read from Settings. Under pytest every log
    line is dropped and no file is opened.

    Args:
        log_level: trace, debug, info, warn or error
        is_production: JSON lines when true, console rendering otherwise
        log_file: Path of the rotated log file, empty to disable

    Returns:
        Root bound logger
    """
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
        return structlog.stdlib.get_logger()

    if log_level is None or is_production is None or log_file is None:
        settings = Settings()
        log_level = log_level or settings.LOG_LEVEL
        is_production = settings.is_production if is_production is None else is_production
        log_file = settings.LOG_FILE if log_file is None else log_file

    processors = [
        # correlation id, sender and command of the message being handled
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=not log_file))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s")
    logging.root.setLevel(_to_logging_level(log_level))
    if log_file:
        attach_file_handler(log_file)

    return structlog.stdlib.get_logger()


def attach_file_handler(path: str) -> RotatingFileHandler:
    """Add a rotating file handler for path to the root logger, once."""
    target = Path(path).resolve()
    for handler in logging.root.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == str(target):
            return handler

    target.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        target,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.root.addHandler(handler)
    return handler


def _to_logging_level(level: str) -> int:
    name = level.strip().upper()
    if name == "TRACE":
        return logging.DEBUG
    if name == "WARN":
        return logging.WARNING
    return getattr(logging, name, logging.INFO)


def set_log_level(level: str) -> bool:
    """Change the root log level at runtime.

    Returns:
        False if level is not one of LOG_LEVELS (case-insensitive)
    """
    if level.strip().lower() not in LOG_LEVELS:
        return False
    logging.root.setLevel(_to_logging_level(level))
    return True


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Adds `component` (last dotted part) and `module_path` to every event.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
