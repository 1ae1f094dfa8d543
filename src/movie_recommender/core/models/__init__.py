"""Core data models."""

from .guardrail import (
    ClassificationVerdict,
    ContentType,
    GuardrailRequest,
    RiskLevel,
    ValidationResult,
)
from .movie import MovieInfo, MovieInfoWithUrl
from .recommendation import (
    BlockReason,
    ContentBlocked,
    CycleReset,
    Recommendation,
    RecommendationFailed,
    RecommendationOutcome,
    ScreeningResult,
    SecurityBlocked,
)

__all__ = [
    "MovieInfo",
    "MovieInfoWithUrl",
    "ContentType",
    "RiskLevel",
    "GuardrailRequest",
    "ClassificationVerdict",
    "ValidationResult",
    "BlockReason",
    "Recommendation",
    "CycleReset",
    "SecurityBlocked",
    "ContentBlocked",
    "RecommendationFailed",
    "RecommendationOutcome",
    "ScreeningResult",
]
