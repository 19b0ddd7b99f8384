"""Configuration management for daily-tasks."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Task catalog
    tasks_config_path: str = Field(
        default="tasks.config.json", description="Path to the JSON task catalog (tasks + doubleScoreDates)"
    )

    # Storage
    sqlite_db_path: str = Field(default="data/daily_tasks.db", description="SQLite file holding daily records")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    # HTTP
    cors_allow_origins: list[str] = Field(default=["*"], description="Origins allowed by the CORS middleware")

    # Calendar
    timezone: str | None = Field(
        default=None, description="IANA timezone used to resolve 'today' (server local time when unset)"
    )

    # Statistics window
    stats_default_days: int = Field(default=7, description="Window size used when 'days' is missing or invalid")
    stats_max_days: int = Field(default=30, description="Largest statistics window a request may ask for")

    @property
    def is_production(self) -> bool:
        """Return True when running in the production environment."""
        return self.environment.lower() == "production"

    def resolve_path(self, value: str) -> Path:
        """Resolve a configured path relative to the project root."""
        path = Path(value)
        if path.is_absolute():
            return path
        return Constants.PROJECT_ROOT / path


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_BAD_REQUEST: int = 400
    HTTP_SERVER_ERROR: int = 500

    # Statistics
    STATS_MIN_DAYS: int = 1

    # Scoring
    DEFAULT_TASK_SCORE: float = 1
    DOUBLE_SCORE_MULTIPLIER: int = 2

    # Storage
    DAILY_RECORDS_TABLE: str = "daily_records"
    DATE_FORMAT_PATTERN: str = r"^\d{4}-\d{2}-\d{2}$"

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent
    LEGACY_DATA_DIR: Path = PROJECT_ROOT / "data"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
