"""Test fixtures for TodoAssistant."""

import json
from datetime import datetime, timezone
from typing import Any

import pytest

from todo_assistant.config import Config
from todo_assistant.errors import UpstreamError
from todo_assistant.models import Project
from todo_assistant.storage.repository import InMemoryTodoRepository
from todo_assistant.suggestions.service import SuggestionService

FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
AI_LABEL_ID = "k57exc6xrw3ar5e1nmab4vnbjs6v1m4p"
EMBEDDING_DIMENSIONS = 1536


class FakeChatClient:
    """Chat client returning canned content and recording requests."""

    def __init__(self, content: str | None = None) -> None:
        self.content = content
        self.calls: list[dict[str, Any]] = []

    async def complete(self, messages: list[dict[str, str]], model: str) -> str | None:
        self.calls.append({"messages": messages, "model": model})
        return self.content

    @property
    def user_payload(self) -> dict[str, Any]:
        """Decoded JSON of the last user message."""
        return json.loads(self.calls[-1]["messages"][1]["content"])


class FakeEmbeddingClient:
    """Embedding client returning constant vectors, optionally failing on the n-th call."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.fail_on_call = fail_on_call
        self.texts: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.texts.append(text)
        if self.fail_on_call is not None and len(self.texts) == self.fail_on_call:
            raise UpstreamError("embedding", 429, '{"error": "rate limited"}')
        return [0.01] * EMBEDDING_DIMENSIONS


def suggestions_json(*names: str) -> str:
    """Build a chat reply suggesting one item per name."""
    return json.dumps(
        {"todos": [{"taskName": name, "description": f"About {name}"} for name in names]}
    )


@pytest.fixture
def config() -> Config:
    """Config with a dummy API key, isolated from the environment's .env file."""
    return Config(_env_file=None, openai_api_key="test-key", ai_label_id=AI_LABEL_ID)


@pytest.fixture
def repository() -> InMemoryTodoRepository:
    """Empty in-memory repository."""
    return InMemoryTodoRepository()


@pytest.fixture
def project(repository: InMemoryTodoRepository) -> Project:
    """A stored project."""
    return repository.create_project("Website Relaunch")


@pytest.fixture
def chat_client() -> FakeChatClient:
    """Chat client suggesting nothing by default."""
    return FakeChatClient(content=json.dumps({"todos": []}))


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    """Embedding client that always succeeds."""
    return FakeEmbeddingClient()


@pytest.fixture
def service(
    repository: InMemoryTodoRepository,
    chat_client: FakeChatClient,
    embedding_client: FakeEmbeddingClient,
    config: Config,
) -> SuggestionService:
    """SuggestionService wired with fakes and a fixed clock."""
    return SuggestionService(
        repository=repository,
        chat_client=chat_client,
        embedding_client=embedding_client,
        config=config,
        clock=lambda: FIXED_NOW,
    )
