"""Configuration management module."""

from .config_manager import ConfigManager
from .models import (
    Config,
    GuardrailConfig,
    LLMConfig,
    LoggingConfig,
    RecommendationConfig,
    ScraperConfig,
    ServerConfig,
)

__all__ = [
    "ConfigManager",
    "Config",
    "LLMConfig",
    "GuardrailConfig",
    "ScraperConfig",
    "RecommendationConfig",
    "ServerConfig",
    "LoggingConfig",
]
