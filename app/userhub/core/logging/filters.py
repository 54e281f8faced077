import contextvars
import logging
import os
import socket
from contextlib import contextmanager
from typing import Any, Dict, Optional

_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("log_context", default={})


class ContextFilter(logging.Filter):
    """
    Enrich every record with process-wide details and the current log context.

    Hostname, pid and app identity are resolved once; the contextvar payload
    (account ids, request ids, ...) is read per record.
    """

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self.hostname = socket.gethostname()
        self.process_id = os.getpid()
        self.environment = os.getenv("ENVIRONMENT", "unknown")
        self.app_name = os.getenv("APP_NAME", "userhub-api")

    def filter(self, record: logging.LogRecord) -> bool:
        record.hostname = self.hostname
        record.process_id = self.process_id
        record.environment = self.environment
        record.app_name = self.app_name

        for key, value in _log_context.get().items():
            setattr(record, key, value)

        return True


class NoiseReductionFilter(logging.Filter):
    """Drop records whose message contains any of the suppressed patterns."""

    def __init__(self, name: str = "", suppress_patterns: Optional[list[str]] = None) -> None:
        super().__init__(name)
        self.suppress_patterns = suppress_patterns or ["/health"]

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not any(pattern in message for pattern in self.suppress_patterns)


@contextmanager
def add_to_log_context(**kwargs: Any):
    """
    Temporarily add key/value pairs to every record logged inside the block.

    Example:
        with add_to_log_context(account_id="123"):
            logger.info("Deleting account")
    """
    token = _log_context.set({**_log_context.get(), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)


def get_log_context() -> Dict[str, Any]:
    return _log_context.get()


def clear_log_context() -> None:
    _log_context.set({})
