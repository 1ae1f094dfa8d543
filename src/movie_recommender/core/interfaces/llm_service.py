"""LLM service interface."""

from abc import ABC, abstractmethod


class ILLMService(ABC):
    """Interface for generative text backends."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Run a single chat completion.

        Args:
            system_prompt: System instructions.
            user_prompt: User message.
            temperature: Sampling temperature.
            max_tokens: Completion token cap.

        Returns:
            Raw text content of the first choice.

        Raises:
            LLMServiceError: If the credential is missing, the request fails,
                or the backend returns an error payload.
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check whether a credential is available."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying client."""
        pass
