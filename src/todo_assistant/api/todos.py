"""To-do API endpoints."""

import json
import logging
from typing import NoReturn

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from todo_assistant.api.models import (
    EmbeddingRequest,
    EmbeddingResponse,
    SuggestSubTodosRequest,
    TodoResponse,
)
from todo_assistant.errors import ConfigurationError, TodoNotFoundError, UpstreamError
from todo_assistant.factory import get_embedding_client, get_repository, get_suggestion_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/projects/{project_id}/todos", response_model=list[TodoResponse])
async def list_todos(project_id: str) -> list[TodoResponse]:
    """List top-level to-do items of a project.

    Unknown projects are not an error, matching the suggestion workflow: the
    items stored under the id are returned, an empty list if there are none.
    """
    repository = get_repository()
    return [TodoResponse.from_todo(todo) for todo in repository.list_todos(project_id)]


@router.get("/todos/{parent_id}/sub-todos", response_model=list[TodoResponse])
async def list_sub_todos(parent_id: str) -> list[TodoResponse]:
    """List sub-items of a to-do item.

    Raises:
        HTTPException: 404 if the parent item does not exist
    """
    repository = get_repository()
    try:
        repository.get_todo(parent_id)
    except TodoNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return [TodoResponse.from_todo(todo) for todo in repository.list_sub_todos(parent_id)]


@router.post("/projects/{project_id}/suggestions", response_model=list[TodoResponse])
async def suggest_missing_todos(project_id: str) -> list[TodoResponse]:
    """Ask the chat model for missing to-do items and create them.

    Returns:
        Created items
    """
    logger.info(f"suggest_missing_todos called: project_id={project_id}")
    try:
        created = await get_suggestion_service().suggest_missing_todos(project_id)
    except Exception as e:
        _raise_http_error(e)
    return [TodoResponse.from_todo(todo) for todo in created]


@router.post("/todos/{parent_id}/suggestions", response_model=list[TodoResponse])
async def suggest_missing_sub_todos(
    parent_id: str,
    request: SuggestSubTodosRequest,
) -> list[TodoResponse]:
    """Ask the chat model for missing sub-items of a to-do and create them.

    Returns:
        Created sub-items
    """
    logger.info(
        f"suggest_missing_sub_todos called: project_id={request.project_id}, parent_id={parent_id}"
    )
    try:
        created = await get_suggestion_service().suggest_missing_sub_todos(
            request.project_id, parent_id, request.task_name, request.description
        )
    except Exception as e:
        _raise_http_error(e)
    return [TodoResponse.from_todo(todo) for todo in created]


@router.post("/embeddings", response_model=EmbeddingResponse)
async def create_embedding(request: EmbeddingRequest) -> EmbeddingResponse:
    """Fetch the embedding vector of a text."""
    try:
        vector = await get_embedding_client().embed(request.text)
    except Exception as e:
        _raise_http_error(e)
    return EmbeddingResponse(embedding=vector, dimensions=len(vector))


def _raise_http_error(error: Exception) -> NoReturn:
    """Map workflow errors to HTTP errors."""
    if isinstance(error, UpstreamError):
        raise HTTPException(status_code=502, detail=str(error)) from error
    if isinstance(error, (json.JSONDecodeError, ValidationError)):
        raise HTTPException(
            status_code=502, detail=f"Malformed model output: {error}"
        ) from error
    if isinstance(error, TodoNotFoundError):
        raise HTTPException(status_code=404, detail=str(error)) from error
    if isinstance(error, ConfigurationError):
        raise HTTPException(status_code=500, detail=str(error)) from error
    logger.exception(f"Unexpected error: {error}")
    raise HTTPException(status_code=500, detail=str(error)) from error
