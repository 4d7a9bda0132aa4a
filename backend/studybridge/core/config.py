"""
Configuration settings for the application.
"""
from pathlib import Path
from typing import Any, List, Optional, Union

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

# Load environment variables from the backend/.env file if it exists
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # API configuration
    PROJECT_NAME: str = Field(default="StudyBridge API")
    API_PORT: int = Field(default=5000)
    API_HOST: str = Field(default="0.0.0.0")
    LOG_LEVEL: str = Field(default="INFO")

    # Database configuration
    DB_HOST: str = Field(default="localhost")
    DB_PORT: str = Field(default="5432")
    DB_USER: str = Field(default="studybridge")
    DB_PASSWORD: str = Field(default="")
    DB_NAME: str = Field(default="studybridge")
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)

    DATABASE_URL: Optional[str] = None

    # CORS configuration
    CORS_ORIGINS: Union[str, List[str]] = Field(default="*")

    # JWT configuration
    JWT_SECRET_KEY: str = Field(...)
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_MINUTES: int = Field(default=60)  # 1 hour

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, v: Optional[str], info: Any) -> str:
        """
        Assemble the async database URL if not provided.

        Bare ``postgres://`` and ``postgresql://`` URLs (as handed out by
        most hosting providers) are rewritten to use the asyncpg driver.
        """
        if v:
            if v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql+asyncpg://", 1)
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            return v

        values = info.data
        user = values.get("DB_USER")
        password = values.get("DB_PASSWORD")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT")
        name = values.get("DB_NAME")

        return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """
        Parse a comma-separated string into a list of CORS origins.
        """
        if isinstance(v, str) and v != "*":
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def sync_database_url(self) -> str:
        """URL for synchronous tooling (Alembic) using the psycopg2 driver."""
        return self.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql+psycopg2://", 1)

    class Config:
        """Config for the BaseSettings class."""
        env_file = ".env"
        case_sensitive = True
        extra = 'ignore'  # Ignore extra fields from environment
        validate_default = True


# Create settings object
settings = Settings()
