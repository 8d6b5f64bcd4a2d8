"""Configuration settings using pydantic-settings."""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    BOT_TOKEN: str = Field(default="", description="Telegram Bot API token")
    OWNER_ID: Optional[int] = Field(
        default=None,
        description="Telegram user ID of the only user the bot serves"
    )

    # Question source
    QUESTIONS_URL: str = Field(
        default="http://localhost:8080/Quize-jsp/Quections",
        description="Endpoint returning the question set as a JSON array"
    )
    QUESTIONS_TIMEOUT: float = Field(
        default=15.0,
        ge=0,
        description="Seconds to wait for the question source before using offline questions (0 disables)"
    )

    # Database
    DATABASE_PATH: str = Field(
        default="data/quiz_bot.db",
        description="Path to SQLite database file"
    )
    HISTORY_KEY: str = Field(
        default="quizHistory",
        description="Key-value slot holding the quiz history"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
