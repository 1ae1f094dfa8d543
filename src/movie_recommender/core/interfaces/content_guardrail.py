"""Content guardrail interface."""

from abc import ABC, abstractmethod

from ..models import ClassificationVerdict, GuardrailRequest


class IContentGuardrail(ABC):
    """Interface for content-safety classification."""

    @abstractmethod
    async def classify(self, request: GuardrailRequest) -> ClassificationVerdict:
        """Classify content for family-friendly appropriateness.

        Args:
            request: Content and its type.

        Returns:
            Verdict; the fail-closed verdict when the reply is malformed.

        Raises:
            GuardrailServiceError: If the classifier could not be run.
        """
        pass
