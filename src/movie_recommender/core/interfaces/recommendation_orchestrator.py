"""Recommendation orchestrator interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import RecommendationOutcome, ScreeningResult


class IRecommendationOrchestrator(ABC):
    """Interface for the end-to-end recommendation flow."""

    @abstractmethod
    async def recommend(
        self, description: str, imdb_urls: Optional[Sequence[str]] = None
    ) -> RecommendationOutcome:
        """Produce exactly one recommendation outcome.

        Args:
            description: Free-text user preferences.
            imdb_urls: Optional IMDb title URLs to enrich the catalog with.

        Returns:
            Recommendation outcome.

        Raises:
            RecommendationTimeoutError: If no outcome is ready within the
                configured request timeout.
        """
        pass

    @abstractmethod
    async def screen(
        self, description: str, imdb_urls: Optional[Sequence[str]] = None
    ) -> ScreeningResult:
        """Screen a description and its reference movies without recommending.

        Raises:
            GuardrailServiceError: If the classifier could not be run.
        """
        pass

    @abstractmethod
    def validate_prerequisites(self) -> List[str]:
        """Validate that all prerequisites are met.

        Returns:
            List of validation errors (empty if all valid).
        """
        pass
