"""LLM service implementations."""

from abc import ABC, abstractmethod
from typing import Any, Optional

import openai

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import LLMServiceError
from ..interfaces import ILLMService


class BaseLLMService(ILLMService, LoggerMixin, ABC):
    """Base LLM service with common functionality."""

    def __init__(self, config: Config):
        """Initialize LLM service.

        Args:
            config: Application configuration.
        """
        self._config = config
        self._llm_config = config.llm
        self._client: Optional[Any] = None

    def is_configured(self) -> bool:
        """Check whether a credential is available."""
        return bool(self._llm_config.api_key)

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
            LLMServiceError: If the credential is missing or the request fails.
        """
        if not self.is_configured():
            raise LLMServiceError(
                "LLM API key not found. Please check your environment configuration."
            )

        self.logger.debug(
            f"LLM request: model={self._llm_config.model} temperature={temperature} "
            f"max_tokens={max_tokens}"
        )
        content = await self._make_llm_request(system_prompt, user_prompt, temperature, max_tokens)

        if not content:
            raise LLMServiceError("No content in LLM response")
        return content

    @abstractmethod
    async def _make_llm_request(
        self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int
    ) -> str:
        """Make request to LLM service.

        Args:
            system_prompt: System prompt.
            user_prompt: User prompt.
            temperature: Sampling temperature.
            max_tokens: Completion token cap.

        Returns:
            LLM response text.
        """
        pass

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client is not None:
            await self._client.close()
            self._client = None


class OpenAILLMService(BaseLLMService):
    """OpenAI chat completions implementation."""

    def _get_client(self) -> openai.AsyncOpenAI:
        """Get or create the API client."""
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self._llm_config.api_key,
                base_url=self._llm_config.base_url,
                timeout=self._llm_config.timeout,
                max_retries=0,
            )
        return self._client

    async def _make_llm_request(
        self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int
    ) -> str:
        """Make request to OpenAI API.

        Args:
            system_prompt: System prompt.
            user_prompt: User prompt.
            temperature: Sampling temperature.
            max_tokens: Completion token cap.

        Returns:
            LLM response text.
        """
        try:
            response = await self._get_client().chat.completions.create(
                model=self._llm_config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as e:
            raise LLMServiceError(f"OpenAI API error: {_error_message(e.body, e.message)}") from e
        except openai.OpenAIError as e:
            raise LLMServiceError(f"OpenAI API request failed: {e}") from e

        if not response.choices:
            raise LLMServiceError("Invalid OpenAI API response format")

        content = response.choices[0].message.content
        if content is None:
            raise LLMServiceError("OpenAI API returned empty content")
        return content


class AnthropicLLMService(BaseLLMService):
    """Anthropic (Claude) LLM service implementation."""

    def _get_client(self) -> Any:
        """Get or create the API client."""
        if self._client is None:
            try:
                import anthropic
            except ImportError:
                raise LLMServiceError(
                    "Anthropic package not installed. Install with: pip install anthropic"
                )

            self._client = anthropic.AsyncAnthropic(
                api_key=self._llm_config.api_key,
                base_url=self._llm_config.base_url,
                timeout=self._llm_config.timeout,
                max_retries=0,
            )
        return self._client

    async def _make_llm_request(
        self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int
    ) -> str:
        """Make request to Anthropic API.

        Args:
            system_prompt: System prompt.
            user_prompt: User prompt.
            temperature: Sampling temperature.
            max_tokens: Completion token cap.

        Returns:
            LLM response text.
        """
        client = self._get_client()

        try:
            response = await client.messages.create(
                model=self._llm_config.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except Exception as e:
            raise LLMServiceError(f"Anthropic API request failed: {e}") from e

        if not response.content:
            raise LLMServiceError("Anthropic API returned empty content")

        content_block = response.content[0]
        if hasattr(content_block, "text"):
            return content_block.text
        raise LLMServiceError("Anthropic API returned unexpected content type")


def _error_message(body: object, default: str) -> str:
    """Pull ``error.message`` out of an API error body."""
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return default
