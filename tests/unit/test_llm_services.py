"""Test LLM backend services."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from movie_recommender.core.services import AnthropicLLMService, OpenAILLMService
from movie_recommender.utils import LLMServiceError

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _openai_client(content="Up (2009)", side_effect=None):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]

    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response, side_effect=side_effect)
    return client


@pytest.mark.unit
@pytest.mark.asyncio
async def test_openai_complete(config):
    """Test a successful chat completion request."""
    service = OpenAILLMService(config)
    client = _openai_client()

    with patch.object(service, "_get_client", return_value=client):
        text = await service.complete("system", "user", temperature=0.1, max_tokens=20)

    assert text == "Up (2009)"
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4"
    assert kwargs["temperature"] == 0.1
    assert kwargs["max_tokens"] == 20
    assert kwargs["messages"] == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "user"},
    ]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_api_key_fails_before_request(config):
    """Test that no request is attempted without a credential."""
    config.llm.api_key = None
    service = OpenAILLMService(config)
    client = _openai_client()

    assert service.is_configured() is False
    with patch.object(service, "_get_client", return_value=client):
        with pytest.raises(LLMServiceError, match="API key not found"):
            await service.complete("system", "user", temperature=0.1, max_tokens=20)

    client.chat.completions.create.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_openai_status_error_uses_body_message(config):
    """Test that the provider's error message is surfaced."""
    service = OpenAILLMService(config)
    error = openai.APIStatusError(
        "Error code: 429",
        response=httpx.Response(429, request=REQUEST),
        body={"error": {"message": "Rate limit reached"}},
    )

    with patch.object(service, "_get_client", return_value=_openai_client(side_effect=error)):
        with pytest.raises(LLMServiceError, match="Rate limit reached"):
            await service.complete("system", "user", temperature=0.1, max_tokens=20)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_openai_connection_error(config):
    """Test that transport errors become service errors."""
    service = OpenAILLMService(config)
    error = openai.APIConnectionError(request=REQUEST)

    with patch.object(service, "_get_client", return_value=_openai_client(side_effect=error)):
        with pytest.raises(LLMServiceError, match="request failed"):
            await service.complete("system", "user", temperature=0.1, max_tokens=20)


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, ""])
async def test_openai_empty_content(config, content):
    """Test that a reply without text is an error."""
    service = OpenAILLMService(config)

    with patch.object(service, "_get_client", return_value=_openai_client(content=content)):
        with pytest.raises(LLMServiceError):
            await service.complete("system", "user", temperature=0.1, max_tokens=20)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_anthropic_complete(config):
    """Test the Anthropic messages request."""
    config.llm.provider = "anthropic"
    service = AnthropicLLMService(config)
    block = MagicMock()
    block.text = "Toy Story (1995)"
    response = MagicMock()
    response.content = [block]
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response)

    with patch.object(service, "_get_client", return_value=client):
        text = await service.complete("system", "user", temperature=0.1, max_tokens=200)

    assert text == "Toy Story (1995)"
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["system"] == "system"
    assert kwargs["max_tokens"] == 200
    assert kwargs["messages"] == [{"role": "user", "content": "user"}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_close_releases_client(config):
    """Test that closing the service closes the cached client."""
    service = OpenAILLMService(config)
    client = MagicMock()
    client.close = AsyncMock()
    service._client = client

    await service.close()
    await service.close()

    client.close.assert_awaited_once()
