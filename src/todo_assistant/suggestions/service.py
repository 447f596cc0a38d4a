"""AI suggestion workflows for to-do items and sub-items."""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from todo_assistant.ai.chat_client import ChatClient
from todo_assistant.ai.embedding_client import EmbeddingClient
from todo_assistant.ai.prompts import (
    build_messages,
    build_user_content,
    sub_todo_system_prompt,
    todo_system_prompt,
)
from todo_assistant.config import Config
from todo_assistant.models import NewTodo, Suggestion, SuggestionBatch, TodoItem
from todo_assistant.storage.repository import TodoRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time, timezone aware."""
    return datetime.now(timezone.utc)


def parse_suggestions(content: str | None) -> list[Suggestion]:
    """Parse the chat model's reply into suggestions.

    Empty content, a non-object top level, or a missing or null "todos" key
    all yield an empty list. Invalid JSON raises json.JSONDecodeError and entries
    without a taskName or description raise pydantic.ValidationError.
    """
    if not content:
        return []
    data = json.loads(content)
    if not isinstance(data, dict) or data.get("todos") is None:
        return []
    return SuggestionBatch.model_validate(data).todos


class SuggestionService:
    """Asks the chat model for missing items and stores them with embeddings."""

    def __init__(
        self,
        repository: TodoRepository,
        chat_client: ChatClient,
        embedding_client: EmbeddingClient,
        config: Config,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize service with its collaborators."""
        self._repository = repository
        self._chat_client = chat_client
        self._embedding_client = embedding_client
        self._config = config
        self._clock = clock

    async def suggest_missing_todos(self, project_id: str) -> list[TodoItem]:
        """Suggest and create top-level to-do items for a project.

        Args:
            project_id: Project to enrich

        Returns:
            Items created, in suggestion order

        Raises:
            Exception: Any failure is logged and re-raised unchanged. Items
                created before the failure are kept.
        """
        try:
            todos = self._repository.list_todos(project_id)
            project_name = self._project_name(project_id)

            messages = build_messages(
                todo_system_prompt(self._config.todo_suggestion_count),
                build_user_content(todos, project_name),
            )
            content = await self._chat_client.complete(messages, self._config.chat_model)
            logger.info(f"Suggestions for project {project_id}: {content}")

            created: list[TodoItem] = []
            for suggestion in parse_suggestions(content):
                embedding = await self._embedding_client.embed(suggestion.task_name)
                # Repository writes may hit disk, keep them off the event loop
                todo = await asyncio.to_thread(
                    self._repository.create_todo,
                    self._new_todo(project_id, suggestion, embedding),
                )
                created.append(todo)
            return created
        except Exception as e:
            logger.error(f"Error in suggest_missing_todos: {e}", exc_info=True)
            raise

    async def suggest_missing_sub_todos(
        self,
        project_id: str,
        parent_id: str,
        task_name: str,
        description: str,
    ) -> list[TodoItem]:
        """Suggest and create sub-items for a parent to-do item.

        Args:
            project_id: Project of the parent item
            parent_id: Parent item ID
            task_name: Parent item's task name (prompt context)
            description: Parent item's description (prompt context)

        Returns:
            Sub-items created, in suggestion order
        """
        try:
            sub_todos = self._repository.list_sub_todos(parent_id)
            project_name = self._project_name(project_id)

            messages = build_messages(
                sub_todo_system_prompt(self._config.sub_todo_suggestion_count),
                build_user_content(
                    sub_todos,
                    project_name,
                    parent_todo={"taskName": task_name, "description": description},
                ),
            )
            content = await self._chat_client.complete(messages, self._config.chat_model)
            logger.info(f"Sub-task suggestions for {parent_id}: {content}")

            created: list[TodoItem] = []
            for suggestion in parse_suggestions(content):
                embedding = await self._embedding_client.embed(suggestion.task_name)
                todo = await asyncio.to_thread(
                    self._repository.create_sub_todo,
                    self._new_todo(project_id, suggestion, embedding, parent_id=parent_id),
                )
                created.append(todo)
            return created
        except Exception as e:
            logger.error(f"Error in suggest_missing_sub_todos: {e}", exc_info=True)
            raise

    def _project_name(self, project_id: str) -> str:
        """Project name, or "" when the project does not exist."""
        project = self._repository.get_project(project_id)
        if project is None:
            logger.warning(f"Project {project_id} not found, using empty project name")
            return ""
        return project.name or ""

    def _new_todo(
        self,
        project_id: str,
        suggestion: Suggestion,
        embedding: list[float],
        parent_id: str | None = None,
    ) -> NewTodo:
        return NewTodo(
            project_id=project_id,
            task_name=suggestion.task_name,
            description=suggestion.description,
            priority=self._config.suggested_priority,
            due_date=self._clock(),
            label_id=self._config.ai_label_id,
            embedding=embedding,
            parent_id=parent_id,
        )
