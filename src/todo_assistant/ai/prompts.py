"""Prompts for the suggestion workflows."""

import json
from typing import Any

from todo_assistant.models import TodoItem


def todo_system_prompt(count: int) -> str:
    """System instruction for suggesting top-level to-do items."""
    return (
        "I'm a project manager and I need help identifying missing to-do items. "
        "I have a list of existing tasks in JSON format, containing objects with "
        "'taskName' and 'description' properties. I also have a good understanding "
        f"of the project scope. Can you help me identify {count} additional to-do items "
        "for the project with projectName that are not yet included in this list? "
        "Please provide these missing items in a separate JSON array with the key 'todos' "
        "containing objects with 'taskName' and 'description' properties. "
        "Ensure there are no duplicates between the existing list and the new suggestions."
    )


def sub_todo_system_prompt(count: int) -> str:
    """System instruction for suggesting sub tasks of a parent to-do."""
    return (
        "I'm a project manager and I need help identifying missing sub tasks for a parent "
        "todo. I have a list of existing sub tasks in JSON format, containing objects with "
        "'taskName' and 'description' properties. I also have a good understanding of the "
        f"project scope. Can you help me identify {count} additional sub tasks that are not "
        "yet included in this list? Please provide these missing items in a separate JSON "
        "array with the key 'todos' containing objects with 'taskName' and 'description' "
        "properties. Ensure there are no duplicates between the existing list and the new "
        "suggestions."
    )


def build_user_content(
    todos: list[TodoItem],
    project_name: str,
    parent_todo: dict[str, str] | None = None,
) -> str:
    """Serialize existing items and project context for the user message.

    Args:
        todos: Existing items, reduced to taskName/description
        project_name: Project name, "" if unknown
        parent_todo: {"taskName", "description"} of the parent for sub tasks

    Returns:
        JSON string {"todos": [...], "projectName": ..., ["parentTodo": {...}]}
    """
    payload: dict[str, Any] = {
        "todos": [{"taskName": t.task_name, "description": t.description} for t in todos],
        "projectName": project_name,
    }
    if parent_todo is not None:
        payload["parentTodo"] = parent_todo
    return json.dumps(payload)


def build_messages(system_prompt: str, user_content: str) -> list[dict[str, str]]:
    """Build the two-message chat request."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_content},
    ]
