"""Test logging setup."""

import logging
import logging.handlers

import pytest

from movie_recommender.config.models import LoggingConfig
from movie_recommender.infrastructure import configure_server_logging, setup_logging
from movie_recommender.infrastructure.logging import SERVER_LOGGERS


@pytest.fixture(autouse=True)
def restore_logging():
    """Put the root and uvicorn loggers back the way the test found them."""
    root = logging.getLogger()
    saved_root = (root.level, list(root.handlers))
    saved_server = {
        name: (logging.getLogger(name).level, logging.getLogger(name).propagate)
        for name in SERVER_LOGGERS
    }

    yield

    for handler in root.handlers:
        if handler not in saved_root[1]:
            handler.close()
    root.setLevel(saved_root[0])
    root.handlers[:] = saved_root[1]
    for name, (level, propagate) in saved_server.items():
        logging.getLogger(name).setLevel(level)
        logging.getLogger(name).propagate = propagate


@pytest.mark.unit
def test_setup_logging_console_only():
    """Test the default console configuration."""
    setup_logging(LoggingConfig(level="debug"))

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert logging.getLogger("openai").level == logging.WARNING
    assert logging.getLogger("aiohttp.client").level == logging.WARNING


@pytest.mark.unit
def test_setup_logging_with_file(tmp_path):
    """Test that a rotating file handler is added and its directory created."""
    log_file = tmp_path / "logs" / "app.log"

    setup_logging(LoggingConfig(level="INFO", file=str(log_file), backup_count=2))
    logging.getLogger("movie_recommender.test").info("written to file")

    root = logging.getLogger()
    file_handlers = [
        h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].backupCount == 2
    file_handlers[0].flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


@pytest.mark.unit
@pytest.mark.parametrize(
    "access_log, access_level", [(False, logging.WARNING), (True, logging.INFO)]
)
def test_server_loggers_propagate_to_root(access_log, access_level):
    """Test that uvicorn logs go through the application handlers."""
    logging.getLogger("uvicorn.error").addHandler(logging.NullHandler())

    configure_server_logging(LoggingConfig(level="INFO", access_log=access_log))

    error_logger = logging.getLogger("uvicorn.error")
    assert error_logger.handlers == []
    assert error_logger.propagate is True
    assert error_logger.level == logging.INFO
    assert logging.getLogger("uvicorn.access").level == access_level
