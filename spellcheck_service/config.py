"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Development/Debug
    RELOAD: bool = False

    # Spell-check Configuration
    SPELLCHECK_ENABLED: bool = False  # Start the spell-check worker at startup
    SPELLCHECK_DICTIONARY_PATH: str = ""  # Word list, one word per line
    SPELLCHECK_FALLBACK_DICTIONARY_PATH: str = "/usr/share/dict/words"  # Tried once if the primary is missing
    SPELLCHECK_SUGGESTION_COUNT: int = 3  # Max suggestions per misspelled word
    SPELLCHECK_MIN_LINE_LENGTH: int = 3  # Lines shorter than this are not checked
    SPELLCHECK_QUEUE_SIZE: int = 1  # Request/reply queue capacity
    SPELLCHECK_REPLY_TIMEOUT_SECONDS: float = 10.0  # Max wait for a worker reply
    SPELLCHECK_SHUTDOWN_TIMEOUT_SECONDS: float = 5.0  # Max wait for the worker loop to exit

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    UVICORN_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


settings = Settings()
