"""Dependency injection factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from todo_assistant.ai.chat_client import ChatClient, OpenAIChatClient
from todo_assistant.ai.embedding_client import EmbeddingClient, HttpEmbeddingClient
from todo_assistant.config import Config
from todo_assistant.storage.repository import TodoRepository
from todo_assistant.storage.yaml_repository import YamlTodoRepository
from todo_assistant.suggestions.service import SuggestionService

logger = logging.getLogger(__name__)

# Global instances for dependency injection
_config: Config | None = None
_repository: TodoRepository | None = None
_chat_client: ChatClient | None = None
_embedding_client: EmbeddingClient | None = None
_suggestion_service: SuggestionService | None = None


def get_config() -> Config:
    """Get or create Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_repository() -> TodoRepository:
    """Get or create the YAML-backed repository singleton."""
    global _repository
    if _repository is None:
        _repository = YamlTodoRepository(get_config().data_file)
    return _repository


def get_chat_client() -> ChatClient:
    """Get or create the chat client singleton.

    Raises:
        ConfigurationError: If OPENAI_API_KEY is not set
    """
    global _chat_client
    if _chat_client is None:
        _chat_client = OpenAIChatClient(get_config().require_api_key())
    return _chat_client


def get_embedding_client() -> EmbeddingClient:
    """Get or create the embedding client singleton."""
    global _embedding_client
    if _embedding_client is None:
        config = get_config()
        _embedding_client = HttpEmbeddingClient(
            api_key=config.openai_api_key,
            model=config.embedding_model,
            url=config.embedding_url,
        )
    return _embedding_client


def get_suggestion_service() -> SuggestionService:
    """Get or create the SuggestionService singleton."""
    global _suggestion_service
    if _suggestion_service is None:
        _suggestion_service = SuggestionService(
            repository=get_repository(),
            chat_client=get_chat_client(),
            embedding_client=get_embedding_client(),
            config=get_config(),
        )
    return _suggestion_service


async def close_clients() -> None:
    """Close HTTP clients and drop the singletons that hold them."""
    global _chat_client, _embedding_client, _suggestion_service
    for client in (_chat_client, _embedding_client):
        close = getattr(client, "close", None)
        if close is None:
            continue
        try:
            await close()
        except Exception as e:
            logger.error(f"[Factory] Failed to close client: {e}")
    _chat_client = None
    _embedding_client = None
    _suggestion_service = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle - startup and shutdown."""
    # Missing credential is fatal before any request is served
    get_config().require_api_key()
    logger.info("[Lifespan] Loading repository...")
    get_repository()
    try:
        yield
    finally:
        logger.info("[Lifespan] Closing HTTP clients...")
        await close_clients()


def create_app() -> FastAPI:
    """Create FastAPI application (composition root)."""
    from todo_assistant.api.todos import router as todos_router

    app = FastAPI(
        title="TodoAssistant",
        description="Suggest missing to-do items with a chat model and store them with embeddings",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(todos_router, prefix="/api")

    return app
