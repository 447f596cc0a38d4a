"""Repository for projects and to-do items."""

import logging
import uuid
from typing import Protocol

from todo_assistant.errors import TodoNotFoundError
from todo_assistant.models import NewTodo, Project, TodoItem

logger = logging.getLogger(__name__)


class TodoRepository(Protocol):
    """Protocol for reading and creating projects and to-do items."""

    def list_todos(self, project_id: str) -> list[TodoItem]:
        """List top-level to-do items of a project."""
        ...

    def list_sub_todos(self, parent_id: str) -> list[TodoItem]:
        """List sub-items of a parent to-do item."""
        ...

    def get_project(self, project_id: str) -> Project | None:
        """Get a project by ID, or None if it does not exist."""
        ...

    def get_todo(self, todo_id: str) -> TodoItem:
        """Get a to-do item by ID."""
        ...

    def create_todo(self, new: NewTodo) -> TodoItem:
        """Create a top-level to-do item."""
        ...

    def create_sub_todo(self, new: NewTodo) -> TodoItem:
        """Create a sub-item under new.parent_id."""
        ...


class InMemoryTodoRepository:
    """Dict-backed repository, insertion ordered. Project references are not enforced."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._projects: dict[str, Project] = {}
        self._todos: dict[str, TodoItem] = {}

    def list_todos(self, project_id: str) -> list[TodoItem]:
        """List top-level to-do items of a project."""
        return [
            todo
            for todo in self._todos.values()
            if todo.project_id == project_id and todo.parent_id is None
        ]

    def list_sub_todos(self, parent_id: str) -> list[TodoItem]:
        """List sub-items of a parent to-do item."""
        return [todo for todo in self._todos.values() if todo.parent_id == parent_id]

    def get_project(self, project_id: str) -> Project | None:
        """Get a project by ID, or None if it does not exist."""
        return self._projects.get(project_id)

    def get_todo(self, todo_id: str) -> TodoItem:
        """Get a to-do item by ID.

        Raises:
            TodoNotFoundError: If no item has this ID
        """
        todo = self._todos.get(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    def create_project(self, name: str) -> Project:
        """Create a new project.

        Seeding helper, not part of TodoRepository: projects are owned by the host
        application and only read here.
        """
        project = Project(id=self._new_id(), name=name)
        self._projects[project.id] = project
        try:
            self._saved()
        except Exception:
            del self._projects[project.id]
            raise
        logger.info(f"Created project {project.id} ({name})")
        return project

    def create_todo(self, new: NewTodo) -> TodoItem:
        """Create a top-level to-do item.

        Raises:
            ValueError: If the payload carries a parent_id
        """
        if new.parent_id is not None:
            raise ValueError("Top-level todo must not have a parent_id")
        return self._insert(new)

    def create_sub_todo(self, new: NewTodo) -> TodoItem:
        """Create a sub-item under new.parent_id.

        Raises:
            ValueError: If the payload has no parent_id
            TodoNotFoundError: If the parent item does not exist
        """
        if new.parent_id is None:
            raise ValueError("Sub-todo requires a parent_id")
        self.get_todo(new.parent_id)
        return self._insert(new)

    def _insert(self, new: NewTodo) -> TodoItem:
        todo = TodoItem.from_new(self._new_id(), new)
        self._todos[todo.id] = todo
        try:
            self._saved()
        except Exception:
            # Keep memory in line with what is on disk
            del self._todos[todo.id]
            raise
        logger.debug(f"Created todo {todo.id} '{todo.task_name}' (parent={todo.parent_id})")
        return todo

    def _new_id(self) -> str:
        return uuid.uuid4().hex

    def _saved(self) -> None:
        """Hook called after every write."""
