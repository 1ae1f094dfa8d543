"""Configuration data models."""

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.constants import BROWSER_USER_AGENT, DEFAULT_CATALOG


def _expand_secret(v: Optional[str]) -> Optional[str]:
    """Expand environment variables, treating unresolved or blank values as absent."""
    if v is None:
        return None
    expanded = os.path.expandvars(v).strip()
    if not expanded or expanded.startswith("$"):
        return None
    return expanded


class LLMConfig(BaseModel):
    """Generative text backend configuration."""

    provider: str = Field(default="openai", description="LLM provider name")
    model: str = Field(default="gpt-4", description="Model identifier")
    api_key: Optional[str] = Field(default=None, description="API key for the provider")
    base_url: Optional[str] = Field(default=None, description="Override for the API endpoint")
    timeout: int = Field(default=30, gt=0, description="Request timeout in seconds")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate LLM provider."""
        allowed = {"openai", "anthropic"}
        if v.lower() not in allowed:
            raise ValueError(f"Provider must be one of: {allowed}")
        return v.lower()

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        """Expand environment variables in API key."""
        return _expand_secret(v)


class GuardrailConfig(BaseModel):
    """Content-safety classifier configuration."""

    enabled: bool = Field(default=True, description="Enable content classification")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=200, gt=0, description="Maximum tokens for the verdict")
    confidence_threshold: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Confidence below which verdicts are logged"
    )


class ScraperConfig(BaseModel):
    """External movie page scraping configuration."""

    user_agent: str = Field(default=BROWSER_USER_AGENT, description="User-Agent header")
    timeout: int = Field(default=10, gt=0, description="Request timeout in seconds")
    cache_enabled: bool = Field(default=True, description="Reuse fetched pages")
    cache_ttl_hours: int = Field(default=24, gt=0, description="Page cache TTL in hours")


class RecommendationConfig(BaseModel):
    """Recommendation call configuration."""

    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=20, gt=0, description="Maximum tokens for the answer")
    request_timeout: float = Field(
        default=30.0, gt=0, description="Whole-request timeout in seconds"
    )
    catalog: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATALOG), description="Curated baseline catalog"
    )
    validate_output: bool = Field(
        default=False, description="Run the guardrail on the recommended title"
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8080, gt=0, lt=65536, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")
    access_log: bool = Field(default=False, description="Log every HTTP request served")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class Config(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig, description="LLM configuration")
    guardrail: GuardrailConfig = Field(
        default_factory=GuardrailConfig, description="Guardrail configuration"
    )
    scraper: ScraperConfig = Field(
        default_factory=ScraperConfig, description="Scraper configuration"
    )
    recommendation: RecommendationConfig = Field(
        default_factory=RecommendationConfig, description="Recommendation configuration"
    )
    server: ServerConfig = Field(default_factory=ServerConfig, description="Server configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )
