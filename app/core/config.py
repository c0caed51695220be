from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use absolute path to .env file
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database - SQLite for local development, override with environment variable for production
    DATABASE_URL: str = "sqlite:///./waitlist.db"
    AUTO_CREATE_TABLES: bool = True

    # JWT
    SECRET_KEY: str = "your-secret-key-here"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Redis (for rate limiting)
    REDIS_URL: str = "redis://localhost:6379"
    RATE_LIMIT_ENABLED: bool = False
    SUBSCRIBE_MAX_PER_MINUTE: int = 5

    # File Storage
    UPLOAD_DIR: str = "./uploads"
    MAX_LOGO_SIZE_BYTES: int = 5 * 1024 * 1024

    # App Settings
    API_PREFIX: str = "/api"
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    # Public site hosting the /w/{slug} pages, used to build share links
    FRONTEND_URL: str = "http://localhost:3000"

    # Demo account created by init_db.py
    DEMO_USER_EMAIL: str = "demo@waitlist.com"
    DEMO_USER_PASSWORD: str = "demo123"


settings = Settings()
