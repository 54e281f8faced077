import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from userhub.core.config import settings


def get_logging_config() -> Dict[str, Any]:
    """
    Build the dictConfig for the current environment.

    Local runs log everything from the app at DEBUG to stdout through the console
    formatter; other environments log INFO and above as full JSON, with errors
    duplicated on stderr.
    """
    is_local = settings.ENVIRONMENT == "local"

    formatters: Dict[str, Any] = {
        "console": {"()": "userhub.core.logging.formatters.ConsoleFormatter"},
        "production": {"()": "userhub.core.logging.formatters.ProductionFormatter"},
    }

    filters: Dict[str, Any] = {
        "context_filter": {"()": "userhub.core.logging.filters.ContextFilter"},
        "noise_reduction": {
            "()": "userhub.core.logging.filters.NoiseReductionFilter",
            "suppress_patterns": ["/health"],
        },
    }

    if is_local:
        handlers: Dict[str, Any] = {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "console",
                "filters": ["context_filter"],
                "stream": "ext://sys.stdout",
            },
        }
    else:
        handlers = {
            "json_stdout": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "production",
                "filters": ["context_filter", "noise_reduction"],
                "stream": "ext://sys.stdout",
            },
            "error_stderr": {
                "class": "logging.StreamHandler",
                "level": "ERROR",
                "formatter": "production",
                "filters": ["context_filter"],
                "stream": "ext://sys.stderr",
            },
        }

    root_handlers = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "root": {"level": "WARNING", "handlers": root_handlers},
        "loggers": {
            "userhub": {
                "level": "DEBUG" if is_local else "INFO",
                "handlers": root_handlers,
                "propagate": False,
            },
            "uvicorn": {"level": "INFO", "propagate": True},
            "uvicorn.access": {"level": "WARNING", "propagate": False},
            "pymongo": {"level": "WARNING", "propagate": True},
            "redis": {"level": "WARNING", "propagate": True},
        },
    }


def load_config_from_yaml(config_path: Path) -> Optional[Dict[str, Any]]:
    if not config_path.exists():
        return None

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        return None


def setup_logging(config_override: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure logging from, in order of preference: the given override,
    ``config/logging.<env>.yaml``, ``config/logging.yaml``, or the built-in config.
    """
    config = config_override

    if config is None:
        config_dir = Path(settings.BASE_DIR) / "config"
        config = load_config_from_yaml(config_dir / f"logging.{settings.ENVIRONMENT}.yaml")
        if config is None:
            config = load_config_from_yaml(config_dir / "logging.yaml")

    if config is None:
        config = get_logging_config()

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Failed to configure logging: {e}", file=sys.stderr)
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[logging.StreamHandler(sys.stdout)],
        )


def setup_exception_logging() -> None:
    """Log uncaught exceptions before the interpreter's own hook prints them."""
    original_excepthook = sys.excepthook

    def handle_uncaught_exception(exc_type, exc_value, exc_traceback):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.getLogger(__name__).critical(
                "Uncaught exception, application will terminate",
                exc_info=(exc_type, exc_value, exc_traceback),
            )

        original_excepthook(exc_type, exc_value, exc_traceback)

    sys.excepthook = handle_uncaught_exception


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
