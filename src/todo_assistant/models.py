"""Domain models for TodoAssistant."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class Project:
    """Project that owns to-do items."""

    id: str
    name: str  # Only used as prompt context


@dataclass
class NewTodo:
    """Payload for creating a to-do or sub-to-do item."""

    project_id: str
    task_name: str
    description: str
    priority: int
    due_date: datetime
    label_id: str | None = None
    embedding: list[float] | None = None
    parent_id: str | None = None  # Set for sub-items only


@dataclass
class TodoItem:
    """Stored to-do item (top-level or sub-item)."""

    id: str
    project_id: str
    task_name: str
    description: str
    priority: int
    due_date: datetime
    label_id: str | None = None
    embedding: list[float] | None = field(default=None, repr=False)
    parent_id: str | None = None
    is_completed: bool = False

    @classmethod
    def from_new(cls, todo_id: str, new: NewTodo) -> "TodoItem":
        """Build a stored item from a creation payload."""
        return cls(
            id=todo_id,
            project_id=new.project_id,
            task_name=new.task_name,
            description=new.description,
            priority=new.priority,
            due_date=new.due_date,
            label_id=new.label_id,
            embedding=list(new.embedding) if new.embedding is not None else None,
            parent_id=new.parent_id,
        )


class Suggestion(BaseModel):
    """Item proposed by the chat model, as it appears in the model's JSON."""

    model_config = ConfigDict(populate_by_name=True)

    task_name: str = Field(alias="taskName")
    description: str


class SuggestionBatch(BaseModel):
    """Top-level object the chat model is asked to return."""

    todos: list[Suggestion] = Field(default_factory=list)
