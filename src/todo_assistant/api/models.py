"""API models for TodoAssistant."""

from datetime import datetime

from pydantic import BaseModel

from todo_assistant.models import TodoItem


class TodoResponse(BaseModel):
    """API response model for to-do items."""

    id: str
    project_id: str
    parent_id: str | None
    task_name: str
    description: str
    priority: int
    due_date: datetime
    label_id: str | None
    is_completed: bool
    embedding_dimensions: int  # Vector itself is not returned

    @classmethod
    def from_todo(cls, todo: TodoItem) -> "TodoResponse":
        """Convert TodoItem to TodoResponse."""
        return cls(
            id=todo.id,
            project_id=todo.project_id,
            parent_id=todo.parent_id,
            task_name=todo.task_name,
            description=todo.description,
            priority=todo.priority,
            due_date=todo.due_date,
            label_id=todo.label_id,
            is_completed=todo.is_completed,
            embedding_dimensions=len(todo.embedding or []),
        )


class SuggestSubTodosRequest(BaseModel):
    """Request model for suggesting sub-items of a parent to-do."""

    project_id: str
    task_name: str
    description: str = ""


class EmbeddingRequest(BaseModel):
    """Request model for fetching an embedding."""

    text: str


class EmbeddingResponse(BaseModel):
    """API response model for embeddings."""

    embedding: list[float]
    dimensions: int
