"""Content validator interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import ValidationResult


class IContentValidator(ABC):
    """Interface for validating user input and model output."""

    @abstractmethod
    async def validate_user_input(
        self,
        description: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a user's free-text description.

        Raises:
            GuardrailServiceError: If the classifier could not be run.
        """
        pass

    @abstractmethod
    async def validate_recommendation(
        self,
        recommendation: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a recommended title before it is returned.

        Raises:
            GuardrailServiceError: If the classifier could not be run.
        """
        pass
