from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be configured via .env file or environment variables.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Student Records"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True

    # =============================================================================
    # SERVER
    # =============================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # =============================================================================
    # POSTGRESQL DATABASE - Individual components
    # =============================================================================
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "123456"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "student_db"

    # Set directly, or built from the POSTGRES_* components
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    # =============================================================================
    # DATABASE POOL SETTINGS
    # =============================================================================
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_ECHO_SQL: bool = False

    # =============================================================================
    # SECURITY
    # =============================================================================
    SECRET_KEY: str = "your-super-secret-key-change-in-production"
    CSRF_TOKEN_MAX_AGE: int = 2 * 60 * 60

    # =============================================================================
    # LOGGING
    # =============================================================================
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def build_database_url(cls, v: Optional[str], info) -> str:
        """
        Build DATABASE_URL from components if not provided.

        Priority:
        1. Use DATABASE_URL if explicitly set in .env
        2. Build from POSTGRES_* components
        """
        if isinstance(v, str) and v:
            return v

        user = info.data.get("POSTGRES_USER")
        password = info.data.get("POSTGRES_PASSWORD")
        host = info.data.get("POSTGRES_HOST")
        port = info.data.get("POSTGRES_PORT")
        db = info.data.get("POSTGRES_DB")

        return f"postgresql://{user}:{password}@{host}:{port}/{db}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()

