from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import string


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Ignore extra fields in .env file
    )

    # -------------------------
    # Database
    # -------------------------
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./quiz_nexus.db",
        description="Async SQLAlchemy URL (postgresql+asyncpg:// in production)"
    )

    SQLALCHEMY_ECHO: bool = False
    DB_POOL_MIN_SIZE: Optional[int] = None
    DB_POOL_MAX_SIZE: Optional[int] = None

    # Applies to connect, pool checkout and statement execution
    DB_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout for storage calls before they surface as unavailable"
    )

    # -------------------------
    # Application
    # -------------------------
    PROJECT_NAME: str = "Quiz Nexus API"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    # =========================================================
    # Access codes
    # =========================================================
    ACCESS_CODE_LENGTH: int = Field(
        default=6,
        ge=4,
        le=10,
        description="Length of generated access codes"
    )

    # No 0/O or 1/I so codes can be read aloud
    ACCESS_CODE_ALPHABET: str = Field(
        default="ABCDEFGHJKLMNPQRSTUVWXYZ23456789",
        description="Characters used for generated access codes"
    )

    ACCESS_CODE_MAX_RETRIES: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Attempts to find a free code before giving up"
    )

    @field_validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level

    @field_validator("ACCESS_CODE_ALPHABET")
    def validate_access_code_alphabet(cls, v):
        """Generated codes are stored upper-cased, so the alphabet must be too."""
        allowed = set(string.ascii_uppercase + string.digits)
        if len(set(v)) < 10 or not set(v) <= allowed:
            raise ValueError(
                "ACCESS_CODE_ALPHABET must hold at least 10 distinct upper-case letters or digits."
            )
        return v


settings = Settings()
