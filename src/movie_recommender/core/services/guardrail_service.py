"""Content-safety guardrail service."""

from typing import Any, Dict, List

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import GuardrailResponseError, GuardrailServiceError, LLMServiceError
from ...utils.json_utils import extract_json_object
from ..interfaces import IContentGuardrail, ILLMService
from ..models import ClassificationVerdict, GuardrailRequest, RiskLevel
from ..prompts import CONTENT_SAFETY_SYSTEM_PROMPT, build_guardrail_user_prompt

RISK_LEVELS = {level.value for level in RiskLevel}


class ContentGuardrailService(IContentGuardrail, LoggerMixin):
    """Classifies content with a fixed safety rubric via the LLM backend.

    Transport failures raise ``GuardrailServiceError``. Once the backend has
    answered, a verdict is always returned: replies that do not match the
    verdict shape yield ``ClassificationVerdict.fail_closed()``.
    """

    def __init__(self, config: Config, llm_service: ILLMService) -> None:
        """Initialize guardrail service.

        Args:
            config: Application configuration.
            llm_service: Generative text backend.
        """
        self._config = config
        self._guardrail_config = config.guardrail
        self._llm_service = llm_service

    async def classify(self, request: GuardrailRequest) -> ClassificationVerdict:
        """Classify content for family-friendly appropriateness.

        Args:
            request: Content and its type.

        Returns:
            Classification verdict.

        Raises:
            GuardrailServiceError: If the classifier could not be run.
        """
        if not self._guardrail_config.enabled:
            return ClassificationVerdict.disabled()

        user_prompt = build_guardrail_user_prompt(request)

        try:
            response_text = await self._llm_service.complete(
                CONTENT_SAFETY_SYSTEM_PROMPT,
                user_prompt,
                temperature=self._guardrail_config.temperature,
                max_tokens=self._guardrail_config.max_tokens,
            )
        except LLMServiceError as e:
            error_msg = f"Content validation failed: {e}"
            self.logger.error(error_msg)
            raise GuardrailServiceError(error_msg) from e

        verdict = self.parse_response(response_text)
        self.logger.info(
            f"Guardrail verdict for {request.content_type.value}: "
            f"appropriate={verdict.is_appropriate} risk={verdict.risk_level.value} "
            f"confidence={verdict.confidence:.2f}"
        )
        if verdict.confidence < self._guardrail_config.confidence_threshold:
            self.logger.warning(
                f"Low-confidence guardrail verdict ({verdict.confidence:.2f}) "
                f"for {request.content_type.value}"
            )
        return verdict

    def parse_response(self, response_text: str) -> ClassificationVerdict:
        """Parse the classifier reply into a verdict.

        Args:
            response_text: Raw model output.

        Returns:
            Parsed verdict, or the fail-closed verdict if the reply is invalid.
        """
        try:
            return self._parse_verdict(response_text)
        except GuardrailResponseError as e:
            self.logger.error(f"Failed to parse guardrail response: {e}")
            self.logger.debug(f"Raw guardrail content: {response_text!r}")
            return ClassificationVerdict.fail_closed()

    def _parse_verdict(self, response_text: str) -> ClassificationVerdict:
        """Validate every verdict field.

        Raises:
            GuardrailResponseError: If any field is missing or malformed.
        """
        data = extract_json_object(response_text)
        if data is None:
            raise GuardrailResponseError("No JSON found in response")

        is_appropriate = data.get("isAppropriate")
        if not isinstance(is_appropriate, bool):
            raise GuardrailResponseError("Invalid isAppropriate field")

        confidence = data.get("confidence")
        if (
            isinstance(confidence, bool)
            or not isinstance(confidence, (int, float))
            or not 0.0 <= confidence <= 1.0
        ):
            raise GuardrailResponseError("Invalid confidence value")

        flagged = _string_list(data, "flaggedCategories", required=True)

        reasoning = data.get("reasoning")
        if not isinstance(reasoning, str):
            raise GuardrailResponseError("Invalid reasoning field")

        suggestions = _string_list(data, "suggestions", required=False)

        risk_level = data.get("riskLevel")
        if not isinstance(risk_level, str) or risk_level not in RISK_LEVELS:
            raise GuardrailResponseError("Invalid riskLevel field")

        return ClassificationVerdict(
            is_appropriate=is_appropriate,
            confidence=float(confidence),
            flagged_categories=flagged,
            reasoning=reasoning,
            suggestions=suggestions,
            risk_level=RiskLevel(risk_level),
        )


def _string_list(data: Dict[str, Any], key: str, required: bool) -> List[str]:
    """Read a list-of-strings field.

    Raises:
        GuardrailResponseError: If the field is malformed, or missing when required.
    """
    value = data.get(key)
    if value is None and not required:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise GuardrailResponseError(f"Invalid {key} field")
    return value
