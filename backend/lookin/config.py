from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application configuration using environment variables."""

    # Application
    APP_NAME: str = "LOOK.IN"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    EMAIL_CONFIRMATION_REQUIRED: bool = True

    # Database
    DATABASE_URL: str = "sqlite:///./lookin.db"
    ENCRYPTION_KEY: str = "your-encryption-key-change-in-production"  # Must be 32 bytes base64

    # CORS
    CORS_ORIGINS: list = ["http://localhost:3000", "http://localhost:5173"]

    # Storage
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_MB: int = 10
    UPLOAD_ORPHAN_MIN_AGE_HOURS: int = 24  # Unreferenced uploads younger than this are kept

    # Limits
    MAX_LISTING_IMAGES: int = 10
    MAX_MESSAGE_LENGTH: int = 5000

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
