"""Content guardrail data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...utils.text_utils import unique_preserving_order

PARSING_ERROR_CATEGORY = "parsing_error"


class ContentType(str, Enum):
    """Kind of content submitted for classification."""

    DESCRIPTION = "description"
    MOVIE_TITLE = "movie_title"
    RECOMMENDATION = "recommendation"


class RiskLevel(str, Enum):
    """Risk level reported by the classifier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GuardrailRequest(BaseModel):
    """A single classification request."""

    content: str = Field(..., description="Content to classify")
    content_type: ContentType = Field(..., description="Kind of content")
    user_id: Optional[str] = Field(None, description="Caller user ID")
    session_id: Optional[str] = Field(None, description="Caller session ID")


class ClassificationVerdict(BaseModel):
    """Result of one guardrail call."""

    is_appropriate: bool = Field(..., alias="isAppropriate")
    confidence: float = Field(..., ge=0.0, le=1.0)
    flagged_categories: List[str] = Field(default_factory=list, alias="flaggedCategories")
    reasoning: str = Field(...)
    suggestions: List[str] = Field(default_factory=list)
    risk_level: RiskLevel = Field(..., alias="riskLevel")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("flagged_categories")
    @classmethod
    def dedupe_categories(cls, v: List[str]) -> List[str]:
        """Flagged categories have set semantics."""
        return unique_preserving_order(v)

    @classmethod
    def fail_closed(cls) -> "ClassificationVerdict":
        """Verdict used whenever the classifier reply cannot be trusted."""
        return cls(
            is_appropriate=False,
            confidence=0.5,
            flagged_categories=[PARSING_ERROR_CATEGORY],
            reasoning="Failed to parse content validation response - blocking for safety",
            suggestions=[],
            risk_level=RiskLevel.HIGH,
        )

    @classmethod
    def disabled(cls) -> "ClassificationVerdict":
        """Verdict returned when the guardrail is switched off."""
        return cls(
            is_appropriate=True,
            confidence=1.0,
            flagged_categories=[],
            reasoning="Guardrail disabled",
            suggestions=[],
            risk_level=RiskLevel.LOW,
        )

    @property
    def is_fail_closed(self) -> bool:
        """Check whether this verdict came from the parsing fallback."""
        return PARSING_ERROR_CATEGORY in self.flagged_categories


class ValidationResult(BaseModel):
    """Outcome of validating user input or a recommendation."""

    is_valid: bool = Field(..., description="Whether the content passed")
    blocked_content: Optional[str] = Field(None, description="Content that was blocked")
    reasoning: Optional[str] = Field(None, description="Why the content was blocked")
    suggestions: List[str] = Field(default_factory=list, description="Remediation suggestions")
