"""Application configuration from environment."""
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "ExamBuddy"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    # Database (any SQLAlchemy async URL)
    database_url: str = "sqlite+aiosqlite:///./exambuddy.db"

    # JWT bearer tokens
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # CORS origin of the web frontend
    frontend_url: str = "*"

    # Where per-topic counters live: "sql" (database) or "memory" (dev only)
    stats_store: Literal["sql", "memory"] = "sql"

    # Subject used for new users and the dashboard default
    default_subject: str = "Insurance Exam"

    # OpenAI
    openai_api_key: str | None = None
    openai_model: str = "gpt-4"
    openai_tutor_model: str = "gpt-3.5-turbo"
    llm_timeout_seconds: float = 30.0
    question_max_tokens: int = 300
    tutor_max_tokens: int = 500
    # How often a pending LLM call checks for a client disconnect
    disconnect_poll_seconds: float = 0.5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
