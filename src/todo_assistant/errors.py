"""Custom exceptions for TodoAssistant."""


class ConfigurationError(Exception):
    """Required configuration (the API credential) is missing."""


class UpstreamError(Exception):
    """The chat or embedding endpoint answered with a non-success status."""

    def __init__(self, service: str, status_code: int, body: str) -> None:
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(f"OpenAI Error: {body}")


class TodoNotFoundError(Exception):
    """No to-do item with the given id."""

    def __init__(self, todo_id: str) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo not found: {todo_id}")
