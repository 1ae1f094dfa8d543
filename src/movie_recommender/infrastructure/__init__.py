"""Infrastructure module for cross-cutting concerns."""

from .container import Container
from .logging import configure_server_logging, setup_logging

__all__ = [
    "Container",
    "configure_server_logging",
    "setup_logging",
]
