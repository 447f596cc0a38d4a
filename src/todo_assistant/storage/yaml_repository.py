"""Repository persisted to a single YAML file."""

import logging
import os
import tempfile
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from todo_assistant.models import Project, TodoItem
from todo_assistant.storage.repository import InMemoryTodoRepository

logger = logging.getLogger(__name__)


class YamlTodoRepository(InMemoryTodoRepository):
    """In-memory repository that loads from and writes back to a YAML document.

    File layout::

        projects:
          - id: ...
            name: ...
        todos:
          - id: ...
            project_id: ...
            parent_id: null
            task_name: ...
            ...
    """

    def __init__(self, data_file: str) -> None:
        """Initialize repository and load existing data if the file exists."""
        super().__init__()
        self._path = Path(data_file)
        if self._path.exists():
            self._load()

    def _load(self) -> None:
        """Load projects and todos from disk."""
        # Try UTF-8 first, fallback to latin-1 for non-UTF-8 files
        try:
            content = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            content = self._path.read_text(encoding="latin-1")

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self._path}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at top level of {self._path}")

        for raw in data.get("projects") or []:
            project = Project(id=str(raw["id"]), name=str(raw.get("name") or ""))
            self._projects[project.id] = project

        for raw in data.get("todos") or []:
            todo = self._parse_todo(raw)
            self._todos[todo.id] = todo

        logger.info(
            f"Loaded {len(self._projects)} projects and {len(self._todos)} todos from {self._path}"
        )

    def _parse_todo(self, raw: dict[str, Any]) -> TodoItem:
        """Parse a YAML mapping into a TodoItem."""
        due_date = raw.get("due_date")
        if isinstance(due_date, str):
            due_date = datetime.fromisoformat(due_date)
        embedding = raw.get("embedding")
        return TodoItem(
            id=str(raw["id"]),
            project_id=str(raw["project_id"]),
            task_name=str(raw.get("task_name") or ""),
            description=str(raw.get("description") or ""),
            priority=int(raw.get("priority", 1)),
            due_date=due_date if isinstance(due_date, datetime) else datetime.now(),
            label_id=raw.get("label_id"),
            embedding=[float(x) for x in embedding] if embedding is not None else None,
            parent_id=raw.get("parent_id"),
            is_completed=bool(raw.get("is_completed", False)),
        )

    def _saved(self) -> None:
        """Rewrite the whole document after every create.

        The document is written to a temporary file in the same directory and
        moved over the old one, so a failed write leaves the previous file intact.
        """
        data = {
            "projects": [{"id": p.id, "name": p.name} for p in self._projects.values()],
            "todos": [
                {
                    "id": t.id,
                    "project_id": t.project_id,
                    "parent_id": t.parent_id,
                    "task_name": t.task_name,
                    "description": t.description,
                    "priority": t.priority,
                    "due_date": t.due_date.isoformat(),
                    "label_id": t.label_id,
                    "is_completed": t.is_completed,
                    "embedding": t.embedding,
                }
                for t in self._todos.values()
            ],
        }
        # Flow style keeps each embedding on one line
        content = yaml.safe_dump(data, default_flow_style=None, sort_keys=False, width=2**31)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(content)
            os.replace(tmp_name, self._path)
        except Exception:
            with suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise
