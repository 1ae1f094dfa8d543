"""Recommendation outcome data models."""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ...utils.constants import (
    CYCLE_RESET_REASONING,
    INTERNAL_ERROR_MESSAGE,
    RANDOM_SELECTION_REASONING,
    SECURITY_BLOCKED_REASONING,
    SECURITY_BLOCKED_SUGGESTIONS,
)
from .movie import MovieInfoWithUrl


class BlockReason(str, Enum):
    """Why a request was refused before a recommendation was made."""

    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
    CONTENT_BLOCKED = "CONTENT_BLOCKED"


class Recommendation(BaseModel):
    """One recommended title."""

    kind: Literal["recommendation"] = "recommendation"
    title: str = Field(..., description="Recommended title as returned by the model")
    reasoning: str = Field(default=RANDOM_SELECTION_REASONING)
    genre: str = Field(default="Various")
    year: str = Field(default="Various")


class CycleReset(BaseModel):
    """Every catalog title has been recommended; history was cleared."""

    kind: Literal["cycle_reset"] = "cycle_reset"
    all_titles: List[str] = Field(default_factory=list, description="Titles listed by the model")
    reasoning: str = Field(default=CYCLE_RESET_REASONING)

    @property
    def message(self) -> str:
        """Human-readable summary of the reset."""
        return (
            "All movies have been recommended! Starting fresh with: "
            f"{', '.join(self.all_titles)}"
        )


class SecurityBlocked(BaseModel):
    """The model detected an attempt to exploit the system."""

    kind: Literal["security_blocked"] = "security_blocked"
    blocked_items: List[str] = Field(default_factory=list)
    reasoning: str = Field(default=SECURITY_BLOCKED_REASONING)
    suggestions: List[str] = Field(default_factory=lambda: list(SECURITY_BLOCKED_SUGGESTIONS))


class ContentBlocked(BaseModel):
    """The description or a referenced movie failed content screening."""

    kind: Literal["content_blocked"] = "content_blocked"
    reason: BlockReason = Field(default=BlockReason.CONTENT_BLOCKED)
    reasoning: str = Field(...)
    blocked_items: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class RecommendationFailed(BaseModel):
    """An unexpected internal failure; details are logged, not returned."""

    kind: Literal["internal_error"] = "internal_error"
    message: str = Field(default=INTERNAL_ERROR_MESSAGE)


RecommendationOutcome = Union[
    Recommendation, CycleReset, SecurityBlocked, ContentBlocked, RecommendationFailed
]


class ScreeningResult(BaseModel):
    """Result of screening a description and its reference movies."""

    blocked: Optional[ContentBlocked] = Field(None, description="Set when screening failed")
    movie_infos: List[MovieInfoWithUrl] = Field(
        default_factory=list, description="References that passed screening"
    )

    @property
    def passed(self) -> bool:
        """Check whether screening passed."""
        return self.blocked is None
