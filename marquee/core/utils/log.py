import logging
import logging.config
import queue
from contextvars import ContextVar
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Any

import uvicorn

from marquee.core.utils.config import Settings

# Set by the logging middleware for the duration of each request
request_id_context: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """
    Add the id of the request being processed to log records, as `%(request_id)s`.

    Records logged outside of a request get `-`.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        # Records are filtered again by file handlers in the listener thread,
        # where the request context is not available
        if not hasattr(record, "request_id"):
            record.request_id = request_id_context.get()
        return True


class ColoredConsoleFormatter(uvicorn.logging.DefaultFormatter):
    """Console formatter printing the level in bold and the message in the level color"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[38;5;12m",
        logging.INFO: "\033[38;5;10m",
        logging.WARNING: "\033[38;5;11m",
        logging.ERROR: "\033[38;5;9m",
        logging.CRITICAL: "\033[38;5;1m",
    }
    BOLD = "\033[1m"
    END = "\033[0m"

    def __init__(self, *args, **kwargs):
        super().__init__(datefmt="%d-%b-%y %H:%M:%S")
        self.level_formatters = {
            level: logging.Formatter(
                f"%(asctime)s - %(name)s - {self.BOLD}%(levelname)s{self.END} - [%(request_id)s] {color}%(message)s{self.END}",
                self.datefmt,
            )
            for level, color in self.LEVEL_COLORS.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        formatter = self.level_formatters.get(
            record.levelno,
            self.level_formatters[logging.ERROR],
        )
        return formatter.format(record)


class LogConfig:
    """
    Configure Marquee loggers:
    - `marquee.access`: one record per request, written to `access.log` and the console
    - `marquee.error`: application lifecycle and errors, written to `errors.log` and the console
    - `uvicorn.error`: server errors, written with `marquee.error` records

    Call `LogConfig().initialize_loggers(settings)` once the settings are known.
    """

    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

    # Listeners started by the last call to `initialize_loggers`
    _listeners: list[QueueListener] = []

    def get_config_dict(self, settings: Settings) -> dict[str, Any]:
        """
        Return a [dictConfig](https://docs.python.org/3/library/logging.config.html#logging-config-dictschema) configuration
        """
        level = "DEBUG" if settings.LOG_DEBUG_MESSAGES else "INFO"
        log_directory = Path(settings.LOG_DIRECTORY)

        def log_file_handler(filename: str) -> dict[str, Any]:
            return {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "default",
                "filters": ["request_id"],
                "filename": str(log_directory / filename),
                "maxBytes": settings.LOG_FILE_MAX_BYTES,
                "backupCount": settings.LOG_FILE_BACKUP_COUNT,
                "level": "INFO",
            }

        return {
            "version": 1,
            # Debug mode keeps SQLAlchemy and third party loggers
            "disable_existing_loggers": not settings.LOG_DEBUG_MESSAGES,
            "filters": {
                "request_id": {"()": "marquee.core.utils.log.RequestIdFilter"},
            },
            "formatters": {
                "default": {
                    "format": self.LOG_FORMAT,
                    "datefmt": "%d-%b-%y %H:%M:%S",
                },
                "console_formatter": {
                    "()": "marquee.core.utils.log.ColoredConsoleFormatter",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "console_formatter",
                    "filters": ["request_id"],
                    "level": level,
                },
                "file_errors": log_file_handler("errors.log"),
                "file_access": log_file_handler("access.log"),
            },
            "loggers": {
                "root": {
                    "level": "DEBUG",
                    "handlers": ["console"],
                },
                "marquee": {
                    "propagate": False,
                },
                "marquee.access": {
                    "handlers": ["file_access", "console"],
                    "level": level,
                },
                "marquee.error": {
                    "handlers": ["file_errors", "console"],
                    "level": level,
                },
                # Requests are logged by marquee.access
                "uvicorn.access": {"handlers": []},
                "uvicorn.error": {
                    "handlers": ["file_errors", "console"],
                    "level": level,
                    "propagate": False,
                },
            },
        }

    def initialize_loggers(self, settings: Settings) -> None:
        """
        Apply the configuration, then move every handler behind a QueueHandler
        so that file writes happen in a listener thread instead of the event loop.
        """
        Path(settings.LOG_DIRECTORY).mkdir(parents=True, exist_ok=True)

        for listener in LogConfig._listeners:
            listener.stop()
        LogConfig._listeners = []

        config_dict = self.get_config_dict(settings=settings)
        logging.config.dictConfig(config_dict)

        for name in config_dict["loggers"]:
            logger = logging.getLogger(name)
            if not logger.handlers:
                continue

            log_queue: queue.Queue[Any] = queue.Queue(-1)
            listener = QueueListener(
                log_queue,
                *logger.handlers,
                respect_handler_level=True,
            )
            listener.start()
            LogConfig._listeners.append(listener)

            # The request id must be read in the thread logging the record
            queue_handler = QueueHandler(log_queue)
            queue_handler.addFilter(RequestIdFilter())
            logger.handlers = [queue_handler]
