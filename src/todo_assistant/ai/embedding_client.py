"""Embedding client for the OpenAI embeddings endpoint."""

import json
import logging
from typing import Protocol

import httpx

from todo_assistant.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class EmbeddingClient(Protocol):
    """Protocol for fetching an embedding vector for a text."""

    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector of text."""
        ...


class HttpEmbeddingClient:
    """Embedding client issuing one raw HTTP POST per text."""

    def __init__(
        self,
        api_key: str,
        model: str,
        url: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize client.

        Args:
            api_key: OpenAI API key, checked at first use
            model: Embedding model name
            url: Embeddings endpoint URL
            http_client: Optional shared httpx client
        """
        self._api_key = api_key
        self._model = model
        self._url = url
        self._http_client = http_client or httpx.AsyncClient()

    async def embed(self, text: str) -> list[float]:
        """Fetch the embedding of text. No batching, caching or retry.

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: If the endpoint answers with a non-2xx status
        """
        if not self._api_key:
            raise ConfigurationError("OpenAI API key is not defined")

        payload = {"input": text, "model": self._model}

        try:
            response = await self._http_client.post(
                self._url,
                content=json.dumps(payload, separators=(",", ":")),
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self._api_key}",
                },
            )

            if not response.is_success:
                raise UpstreamError("embedding", response.status_code, response.text)

            vector: list[float] = response.json()["data"][0]["embedding"]
            logger.info(f"Embedding of {text}: {len(vector)} dimensions")
            return vector
        except Exception as e:
            logger.error(f"Failed to fetch embedding from OpenAI API: {e}")
            raise

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()
