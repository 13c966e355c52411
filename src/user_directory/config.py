import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./data/user_directory.sqlite3")
    database_pool_size: int = int(os.getenv("DATABASE_POOL_SIZE", "5"))

    # Response cache
    cache_dir: str = os.getenv("CACHE_DIR", "./cache")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "60"))  # seconds

    # Search
    search_result_limit: int = int(os.getenv("SEARCH_RESULT_LIMIT", "6"))
    search_max_length: int = int(os.getenv("SEARCH_MAX_LENGTH", "200"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str | None = os.getenv("LOG_FILE")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.database_pool_size < 1:
            raise ValueError("DATABASE_POOL_SIZE must be at least 1")

        if self.search_result_limit < 1:
            raise ValueError("SEARCH_RESULT_LIMIT must be at least 1")

        if self.search_max_length < 1:
            raise ValueError("SEARCH_MAX_LENGTH must be at least 1")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
