"""Central application settings loaded from environment variables and backend/.env."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storyslip.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Edit locks
    LOCK_TTL_MINUTES: int = 10
    LOCK_MAX_EXTEND_MINUTES: int = 60

    # Version history
    VERSION_RETENTION: int = 50
    VERSION_HISTORY_MAX_LIMIT: int = 100
    # Retries for version-number collisions between concurrent writers
    VERSION_WRITE_RETRIES: int = 5

    class Config:
        # Load backend/.env regardless of the working directory.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
