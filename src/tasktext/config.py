"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

from .models.enums import MainDialect


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "tasktext"

    # CORS
    cors_origins: list[str] = ["*"]

    # Dialect used for tasks whose text carries no recognizable markers
    default_dialect: MainDialect = MainDialect.BRACKET

    class Config:
        env_prefix = "TASKTEXT_"
        case_sensitive = False


settings = Settings()
