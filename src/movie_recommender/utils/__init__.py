"""Utility functions and classes."""

from .exceptions import (
    ConfigurationError,
    GuardrailResponseError,
    GuardrailServiceError,
    LLMServiceError,
    MetadataExtractionError,
    MovieRecommenderError,
    OrchestratorError,
    RecommendationTimeoutError,
)
from .imdb_url import extract_imdb_id, is_valid_imdb_url, normalize_imdb_url, unique_imdb_urls
from .json_utils import extract_json_object, find_balanced_object
from .text_utils import (
    first_year,
    normalize_title_key,
    strip_site_suffix,
    strip_year_annotation,
    unique_preserving_order,
)

__all__ = [
    "MovieRecommenderError",
    "ConfigurationError",
    "LLMServiceError",
    "GuardrailServiceError",
    "GuardrailResponseError",
    "MetadataExtractionError",
    "OrchestratorError",
    "RecommendationTimeoutError",
    "normalize_imdb_url",
    "is_valid_imdb_url",
    "extract_imdb_id",
    "unique_imdb_urls",
    "extract_json_object",
    "find_balanced_object",
    "strip_year_annotation",
    "strip_site_suffix",
    "first_year",
    "unique_preserving_order",
    "normalize_title_key",
]
