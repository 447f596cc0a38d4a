"""Chat completion client."""

import logging
from typing import Protocol

import openai
from openai import AsyncOpenAI

from todo_assistant.errors import UpstreamError

logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """Protocol for chat completion calls."""

    async def complete(self, messages: list[dict[str, str]], model: str) -> str | None:
        """Send messages and return the first choice's content."""
        ...


class OpenAIChatClient:
    """Chat client backed by the OpenAI SDK."""

    def __init__(self, api_key: str, client: AsyncOpenAI | None = None) -> None:
        """Initialize with API key, or with a prebuilt AsyncOpenAI client.

        The SDK's built-in retries are disabled: one request per completion.
        """
        self._client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    async def complete(self, messages: list[dict[str, str]], model: str) -> str | None:
        """Single non-streaming chat completion.

        Args:
            messages: Chat messages ({"role", "content"})
            model: Chat model name

        Returns:
            Message content of the first choice, None if empty

        Raises:
            UpstreamError: If the endpoint answers with an error status
            ValueError: If the response has no choices
        """
        try:
            response = await self._client.chat.completions.create(
                messages=messages,  # type: ignore[arg-type]
                model=model,
            )
        except openai.APIStatusError as e:
            logger.error(f"Chat completion failed with status {e.status_code}")
            raise UpstreamError("chat", e.status_code, e.response.text) from e

        if not response.choices:
            raise ValueError("Chat completion returned no choices")
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
