# core/settings.py
from pathlib import Path

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Frontend
    FRONTEND_ORIGIN: str = "http://localhost:3000"
    UVICORN_MODE: str = "development"

    # Database
    DATABASE_FOLDER: str = "data"
    DATABASE_URL: str = "sqlite:///data/library.db"
    RESET_DATABASE_ON_STARTUP: bool = False
    SEED_DATABASE: bool = True

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # API surface
    API_VENDOR: str = "marvin"
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 20

    class Config:
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
