"""Configuration settings for the face ledger service."""
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values

    Attributes:
        DATABASE_URL: SQLAlchemy async URL of the identity/ledger database
        DEFAULT_MATCH_THRESHOLD: Euclidean distance below which a face is a match
        DESCRIPTOR_DIMENSION: Fixed descriptor length; derived from the first enrollment when unset
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",
        env_nested_delimiter="__"
    )

    # Core Settings
    PROJECT_NAME: str = "Face Ledger Service"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> List[str]:
        """Get list of allowed origins."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Database Settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./faces.db"
    DATABASE_ECHO: bool = False

    # Matching Settings
    DEFAULT_MATCH_THRESHOLD: float = 0.5
    DESCRIPTOR_DIMENSION: Optional[int] = None

    # Ledger Settings
    DEFAULT_HISTORY_LIMIT: int = 50
    MAX_HISTORY_LIMIT: int = 1000

    # Extractor Settings
    EXTRACTOR: str = "insightface"
    MODEL_PATH: str = "buffalo_l"
    MODEL_CACHE_DIR: str = ".model_cache"
    MAX_IMAGE_PIXELS: int = 1920 * 1080  # ~2MP (Full HD)
    MAX_FACES_PER_IMAGE: Optional[int] = None  # None means every detected face

    # Optional settings with defaults
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000


settings = Settings()
