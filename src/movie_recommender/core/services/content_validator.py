"""Content validation built on the guardrail."""

from typing import Optional

from ...infrastructure.logging import LoggerMixin
from ...utils.constants import DEFAULT_CONTENT_SUGGESTIONS
from ..interfaces import IContentGuardrail, IContentValidator
from ..models import ContentType, GuardrailRequest, ValidationResult


class ContentValidator(IContentValidator, LoggerMixin):
    """Turns guardrail verdicts into user-facing validation results.

    Classifier failures propagate as ``GuardrailServiceError``; nothing here
    lets content through when the guardrail could not run.
    """

    def __init__(self, guardrail: IContentGuardrail) -> None:
        """Initialize content validator.

        Args:
            guardrail: Content guardrail service.
        """
        self._guardrail = guardrail

    async def validate_user_input(
        self,
        description: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a user's free-text description.

        Args:
            description: User preferences.
            user_id: Optional caller user ID.
            session_id: Optional caller session ID.

        Returns:
            Validation result; blocked descriptions always carry suggestions.
        """
        verdict = await self._guardrail.classify(
            GuardrailRequest(
                content=description,
                content_type=ContentType.DESCRIPTION,
                user_id=user_id,
                session_id=session_id,
            )
        )

        if verdict.is_appropriate:
            return ValidationResult(is_valid=True)

        self.logger.info(f"Description blocked: {verdict.reasoning}")
        return ValidationResult(
            is_valid=False,
            blocked_content=description,
            reasoning=verdict.reasoning,
            suggestions=verdict.suggestions or list(DEFAULT_CONTENT_SUGGESTIONS),
        )

    async def validate_recommendation(
        self,
        recommendation: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a recommended title before it is returned.

        Args:
            recommendation: Recommended title.
            user_id: Optional caller user ID.
            session_id: Optional caller session ID.

        Returns:
            Validation result.
        """
        verdict = await self._guardrail.classify(
            GuardrailRequest(
                content=recommendation,
                content_type=ContentType.RECOMMENDATION,
                user_id=user_id,
                session_id=session_id,
            )
        )

        if verdict.is_appropriate:
            return ValidationResult(is_valid=True)

        self.logger.info(f"Recommendation blocked: {recommendation!r}")
        return ValidationResult(
            is_valid=False,
            blocked_content=recommendation,
            reasoning=verdict.reasoning,
            suggestions=verdict.suggestions or ["Please request a different recommendation."],
        )
