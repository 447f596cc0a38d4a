"""Configuration for TodoAssistant."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from todo_assistant.errors import ConfigurationError


class Config(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str = Field(default="")
    chat_model: str = Field(default="gpt-3.5-turbo")
    embedding_model: str = Field(default="text-embedding-ada-002")
    embedding_url: str = Field(default="https://api.openai.com/v1/embeddings")

    # Label attached to every item created by the suggestion workflows
    ai_label_id: str = Field(default="k57exc6xrw3ar5e1nmab4vnbjs6v1m4p")
    todo_suggestion_count: int = Field(default=5)
    sub_todo_suggestion_count: int = Field(default=2)
    suggested_priority: int = Field(default=1)

    data_file: str = Field(default="todo_assistant.yaml")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    def require_api_key(self) -> str:
        """Return the OpenAI API key.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is missing or empty
        """
        if not self.openai_api_key:
            raise ConfigurationError(
                "The OPENAI_API_KEY environment variable is missing or empty; "
                "set it before calling the chat or embedding endpoints."
            )
        return self.openai_api_key
