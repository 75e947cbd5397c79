"""
FamilyMeal settings, loaded from environment variables or a .env file.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings.

    The planning knobs tune how the weekly generator is fed: how many
    recipes are sampled per run and how far back already-eaten recipes
    are excluded.
    """

    app_name: str = "FamilyMeal"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # Database
    database_url: str = Field(
        default="postgresql+psycopg2://familymeal@localhost:5432/familymeal",
        description="SQLAlchemy connection URL",
    )
    db_echo: bool = False
    db_init_attempts: int = Field(default=8, ge=1)
    db_init_delay_sec: float = Field(default=2.0, ge=0)

    # Planning
    candidate_pool_size: int = Field(
        default=50, ge=1, description="Recipes sampled as candidates per generation run"
    )
    recent_lookback_days: int = Field(
        default=14, ge=0, description="Days before the week whose recipes are not reused"
    )
    require_monday_week_start: bool = Field(
        default=False, description="Reject week plans that do not start on a Monday"
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # HTTP
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    api_prefix: str = ""
    api_title: str = "FamilyMeal API"
    api_description: str = "Family meal planning with weekly plan generation"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


settings = Settings()
