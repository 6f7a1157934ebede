"""Application settings, read from the environment and an optional ``.env`` file."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Flash Tans"
    environment: str = "development"

    # Storage: "sql" takes any SQLAlchemy URL, "mongodb" talks to MongoDB
    store_backend: Literal["sql", "mongodb"] = "sql"
    database_url: str = "sqlite:///./flash_tans.db"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "flash_tans"
    # Multi-document transactions need a replica set
    mongo_transactions: bool = False

    seed_sample_products: bool = True

    # Logging
    log_level: str | None = None
    log_dir: str = "logs"
    log_to_file: bool = True

    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
