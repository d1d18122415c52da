"""Logging configuration for the uvicorn listeners."""

import logging
import os

import structlog


def get_uvicorn_log_level():
    level = os.getenv("UVICORN_LOG_LEVEL", "WARNING").upper()
    return getattr(logging, level, logging.WARNING)


def get_log_format():
    return os.getenv("LOG_FORMAT", "pretty").lower()


def get_log_colors():
    colors_env = os.getenv("LOG_COLORS", "true").lower()
    return colors_env in ("true", "1", "yes", "on")


class RenameLoggerProcessor:
    """Processor to rename confusing logger names."""

    def __call__(self, logger, name, event_dict):
        if event_dict.get("logger") == "uvicorn.error":
            event_dict["logger"] = "ipc.listener"
        elif event_dict.get("logger") == "uvicorn.access":
            event_dict["logger"] = "ipc.http"
        return event_dict


def get_logging_config():
    """Get uvicorn logging configuration based on environment settings.

    Listeners share the terminal with the interactive loop, so uvicorn is
    quiet (WARNING) unless UVICORN_LOG_LEVEL says otherwise.
    """
    if get_log_format() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=get_log_colors())

    level = get_uvicorn_log_level()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": renderer,
                "foreign_pre_chain": [
                    structlog.stdlib.add_logger_name,
                    structlog.stdlib.add_log_level,
                    RenameLoggerProcessor(),
                    structlog.stdlib.PositionalArgumentsFormatter(),
                    structlog.processors.TimeStamper(fmt="iso"),
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.UnicodeDecoder(),
                ],
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {
                "handlers": ["default"],
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False,
            },
        },
    }


LOGGING_CONFIG = get_logging_config()
