"""Core service implementations."""

from .content_validator import ContentValidator
from .guardrail_service import ContentGuardrailService
from .llm_services import AnthropicLLMService, OpenAILLMService
from .metadata_extractor import ImdbMetadataExtractor
from .movie_registry import RecommendationHistory, SessionMovieRegistry
from .recommendation_orchestrator import RecommendationOrchestrator

__all__ = [
    "OpenAILLMService",
    "AnthropicLLMService",
    "ImdbMetadataExtractor",
    "ContentGuardrailService",
    "ContentValidator",
    "SessionMovieRegistry",
    "RecommendationHistory",
    "RecommendationOrchestrator",
]
