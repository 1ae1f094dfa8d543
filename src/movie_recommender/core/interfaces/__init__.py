"""Core interfaces for dependency injection."""

from .content_guardrail import IContentGuardrail
from .content_validator import IContentValidator
from .llm_service import ILLMService
from .metadata_extractor import IMetadataExtractor
from .movie_registry import IMovieRegistry, IRecommendationHistory
from .recommendation_orchestrator import IRecommendationOrchestrator

__all__ = [
    "ILLMService",
    "IMetadataExtractor",
    "IContentGuardrail",
    "IContentValidator",
    "IMovieRegistry",
    "IRecommendationHistory",
    "IRecommendationOrchestrator",
]
