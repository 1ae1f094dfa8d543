"""Logging configuration and setup."""

import logging
import logging.handlers
from pathlib import Path
from typing import List

from ..config.models import LoggingConfig

# HTTP clients used by the scraper and the LLM SDKs
CLIENT_LOGGERS = ("aiohttp.client", "urllib3", "httpx", "openai", "anthropic")

# Loggers owned by the uvicorn server; routed through the root handlers
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "uvicorn.asgi")


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """Create the console handler and, if configured, the rotating file handler."""
    formatter = logging.Formatter(config.format)
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(config.level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger for the CLI and the HTTP server.

    Scraper and LLM client chatter is capped at WARNING whatever the
    configured level, so request logs stay readable at DEBUG.

    Args:
        config: Logging configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    root_logger.handlers.clear()
    for handler in _build_handlers(config):
        root_logger.addHandler(handler)

    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured with level {config.level}"
        + (f", file {config.file}" if config.file else "")
    )


def configure_server_logging(config: LoggingConfig) -> None:
    """Route uvicorn's loggers through the application handlers.

    Meant to be paired with ``uvicorn.run(..., log_config=None)`` so uvicorn
    installs no handlers of its own. Per-request access lines are only
    emitted when ``access_log`` is enabled.

    Args:
        config: Logging configuration.
    """
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(config.level)

    access_level = logging.INFO if config.access_log else logging.WARNING
    logging.getLogger("uvicorn.access").setLevel(access_level)


class LoggerMixin:
    """Mixin class that provides logging functionality."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
