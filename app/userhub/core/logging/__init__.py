"""
Structured logging for the Userhub service.

JSON records through python-json-logger, enriched with process-wide details
and with per-request context held in a contextvar.

Usage:
    from userhub.core.logging import setup_logging, get_logger, add_to_log_context

    setup_logging()
    logger = get_logger(__name__)

    with add_to_log_context(account_id="123"):
        logger.info("Updating account")
"""

from .config import get_logger, get_logging_config, setup_exception_logging, setup_logging
from .filters import add_to_log_context, clear_log_context, get_log_context

__all__ = [
    "setup_logging",
    "setup_exception_logging",
    "get_logger",
    "get_logging_config",
    "add_to_log_context",
    "get_log_context",
    "clear_log_context",
]
