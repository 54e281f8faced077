import traceback
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

CONSOLE_RENAME_FIELDS = {
    "levelname": "level",
    "asctime": "timestamp",
    "name": "logger",
}

PRODUCTION_RENAME_FIELDS = {
    **CONSOLE_RENAME_FIELDS,
    "pathname": "file_path",
    "lineno": "line_number",
    "funcName": "function_name",
}


class ConsoleFormatter(JsonFormatter):
    """Compact JSON output for development consoles."""

    def __init__(self, **kwargs):
        fmt = kwargs.pop("format", "%(asctime)s %(name)s %(levelname)s %(message)s")
        datefmt = kwargs.pop("datefmt", "%Y-%m-%d %H:%M:%S")
        rename_fields = {**CONSOLE_RENAME_FIELDS, **kwargs.pop("rename_fields", {})}

        super().__init__(fmt=fmt, datefmt=datefmt, rename_fields=rename_fields, **kwargs)


class ProductionFormatter(JsonFormatter):
    """
    Full JSON output for shipped environments.

    Exceptions are emitted as a structured ``exception`` object
    (type, message, traceback lines) instead of a preformatted string.
    """

    def __init__(self, **kwargs):
        fmt = kwargs.pop(
            "format",
            "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d %(funcName)s",
        )
        datefmt = kwargs.pop("datefmt", "%Y-%m-%dT%H:%M:%S")
        rename_fields = {**PRODUCTION_RENAME_FIELDS, **kwargs.pop("rename_fields", {})}

        super().__init__(fmt=fmt, datefmt=datefmt, rename_fields=rename_fields, **kwargs)

    def add_fields(self, log_record: Dict[str, Any], record: Any, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        if record.exc_info:
            exc_type, exc_value, exc_traceback = record.exc_info
            log_record["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": traceback.format_exception(exc_type, exc_value, exc_traceback) if exc_traceback else None,
            }
            log_record.pop("exc_info", None)
            log_record.pop("exc_text", None)
