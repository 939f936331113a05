"""Application settings and configuration."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = Field(
        default="Awareness Quiz API",
        description="Title shown in the OpenAPI docs",
        validation_alias="APP_NAME",
    )
    api_prefix: str = Field(
        default="/api",
        description="Prefix for every API route",
        validation_alias="API_PREFIX",
    )
    environment: Literal["development", "production"] = Field(
        default="development",
        description="Selects console or JSON log output",
        validation_alias="ENVIRONMENT",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level",
        validation_alias="LOG_LEVEL",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for rotating log files (unset = no file logging)",
        validation_alias="LOG_DIR",
    )

    # Storage
    storage_backend: Literal["memory", "mongo"] = Field(
        default="memory",
        description="Where quizzes and attempts are persisted",
        validation_alias="STORAGE_BACKEND",
    )
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
        validation_alias="MONGODB_URI",
    )
    mongodb_database: str = Field(
        default="awareness",
        description="MongoDB database name",
        validation_alias="MONGODB_DATABASE",
    )

    # Grading
    attempt_create_retries: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Retries when two starts race for the same attempt number",
        validation_alias="ATTEMPT_CREATE_RETRIES",
    )
    recent_attempts_limit: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Recent attempts included in quiz statistics",
        validation_alias="RECENT_ATTEMPTS_LIMIT",
    )
    manual_grading_policy: Literal["review", "exact-match"] = Field(
        default="review",
        description=(
            "How text questions without a correct answer are graded: "
            "'review' leaves them for a human, 'exact-match' compares as usual"
        ),
        validation_alias="MANUAL_GRADING_POLICY",
    )
    seed_sample_quizzes: bool = Field(
        default=False,
        description="Load the bundled sample quizzes into an empty store at startup",
        validation_alias="SEED_SAMPLE_QUIZZES",
    )

    # Output Settings
    default_output_dir: str = Field(
        default="output",
        description="Directory for exported documents",
        validation_alias="DEFAULT_OUTPUT_DIR",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Loaded the first time and then cached for the services and the CLI
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
