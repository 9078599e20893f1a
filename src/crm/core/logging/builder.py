# src/crm/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

`make_dict_config(settings)` returns the mapping; `setup_logging(settings)`
applies it. Call `setup_logging` once at startup (the app lifespan does) and
use `logging.getLogger(__name__)` everywhere else.

Handlers are picked from the settings:

| `LOG_TO_STDOUT` | `LOG_DIR` set  | Active handlers                 |
| --------------- | -------------- | ------------------------------- |
| `true`          | doesn't matter | `console` + `error_console`     |
| `false`         | not set        | `console` + `error_console`     |
| `false`         | set            | `console` + `file` + `error_file` |

Loggers configured besides root: `uvicorn.error`, `uvicorn.access` and
`sqlalchemy.engine` (DEBUG only with ENABLE_SQL_LOGGING, since SQL can carry
customer data).
"""

import logging
import logging.config
from pathlib import Path

from crm.config.settings import Settings
from crm.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color in text mode, plain otherwise) and "json"
      - filters: "request_id", "redact"
      - handlers: console, then file/error_file OR error_console depending on LOG_TO_STDOUT
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration.

    Creates LOG_DIR when logging to files, then applies dictConfig and adds a
    RequestIdFilter on the root logger so `%(request_id)s` always resolves.
    """
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
