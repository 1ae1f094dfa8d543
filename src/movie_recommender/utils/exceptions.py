"""Custom exceptions for the application."""


class MovieRecommenderError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(MovieRecommenderError):
    """Configuration-related errors."""

    pass


class LLMServiceError(MovieRecommenderError):
    """Generative backend errors (missing credential, transport, error payload)."""

    pass


class GuardrailServiceError(MovieRecommenderError):
    """Raised when the content classifier cannot be run at all."""

    pass


class GuardrailResponseError(MovieRecommenderError):
    """Classifier reply did not match the expected verdict shape.

    Never leaves the guardrail service; it is converted to the fail-closed verdict.
    """

    pass


class MetadataExtractionError(MovieRecommenderError):
    """Metadata extractor errors."""

    pass


class OrchestratorError(MovieRecommenderError):
    """Orchestrator errors."""

    pass


class RecommendationTimeoutError(OrchestratorError):
    """Recommendation did not finish within the request timeout."""

    pass
