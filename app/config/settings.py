import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues.

    SQLite is only meant for local development; set DATABASE_URL to a
    PostgreSQL connection string for deployed environments.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "coach.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.warning(f"Using SQLite database (LOCAL DEV ONLY): {db_url}")
    return db_url


class Settings(BaseSettings):
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    llm_model: str = Field(
        default="gpt-5-mini",
        validation_alias="LLM_MODEL",
        description="Model used for citation search, fact distillation and plan generation",
    )
    semantic_scholar_api_key: str = Field(default="", validation_alias="SEMANTIC_SCHOLAR_API_KEY")
    pubmed_base_url: str = Field(
        default="https://eutils.ncbi.nlm.nih.gov/entrez/eutils",
        validation_alias="PUBMED_BASE_URL",
    )
    semantic_scholar_base_url: str = Field(
        default="https://api.semanticscholar.org/graph/v1",
        validation_alias="SEMANTIC_SCHOLAR_BASE_URL",
    )
    semantic_scholar_min_interval_seconds: float = Field(
        default=1.0,
        validation_alias="SEMANTIC_SCHOLAR_MIN_INTERVAL_SECONDS",
        description="Minimum spacing between Semantic Scholar requests",
    )
    http_timeout_seconds: float = Field(default=15.0, validation_alias="HTTP_TIMEOUT_SECONDS")
    llm_timeout_seconds: float = Field(default=60.0, validation_alias="LLM_TIMEOUT_SECONDS")
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    auth_secret_key: str = Field(default="", validation_alias="AUTH_SECRET_KEY")
    auth_algorithm: str = Field(default="HS256", validation_alias="AUTH_ALGORITHM")
    auth_token_expire_days: int = Field(default=30, validation_alias="AUTH_TOKEN_EXPIRE_DAYS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("openai_api_key")
    @classmethod
    def validate_openai_api_key(cls, value: str) -> str:
        """Warn when the model provider key is missing.

        Generation still works without it: every model stage degrades to its
        empty or static fallback result.
        """
        if not value:
            logger.warning(
                "OPENAI_API_KEY is not set. Citation fallback, fact distillation and "
                "plan generation will use their fallback results."
            )
        return value

    @field_validator("semantic_scholar_min_interval_seconds", "http_timeout_seconds", "llm_timeout_seconds")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value


settings = Settings()
