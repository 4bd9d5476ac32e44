"""Configuration management for the application."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    api_version: str = "v1"

    # Rules engine defaults
    engine_auto_select_variant: bool = True
    engine_include_reference_blocks: bool = True
    engine_verbose_logging: bool = False
    engine_max_dependency_depth: int = 10

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


# Global settings instance
settings = Settings()
