"""Structured logging for the bot.

    configure_logging()          set up structlog, stderr and the log file
    get_module_logger()          logger bound to the calling module
    set_log_level(level)         change the root level at runtime
    bind_message_context(...)    bind per-message context to every log line
"""

from infrastructure.logging.setup import (
    LOG_LEVELS,
    attach_file_handler,
    configure_logging,
    get_module_logger,
    set_log_level,
)

from infrastructure.logging.context import bind_message_context

__all__ = [
    "LOG_LEVELS",
    "attach_file_handler",
    "configure_logging",
    "get_module_logger",
    "set_log_level",
    "bind_message_context",
]
