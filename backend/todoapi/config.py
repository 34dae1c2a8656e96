"""
Todo API Backend: Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at import time; storage-specific requirements are checked
       when the storage backend is built during startup.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Canonical provider names, keyed by their lower-case spelling
PROVIDER_IN_MEMORY = "InMemory"
PROVIDER_COSMOS_DB = "CosmosDb"
_PROVIDERS = {
    PROVIDER_IN_MEMORY.lower(): PROVIDER_IN_MEMORY,
    PROVIDER_COSMOS_DB.lower(): PROVIDER_COSMOS_DB,
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development. The only
    setting without a usable default is COSMOS_CONNECTION_STRING, which is
    required once DATABASE_PROVIDER selects Cosmos DB.
    """

    # ── Storage Provider ──────────────────────────────────────────────────
    # InMemory → relational backend (SQLAlchemy), CosmosDb → document backend
    database_provider: str = Field(
        default=PROVIDER_IN_MEMORY,
        description="Storage backend: InMemory or CosmosDb (case-insensitive)",
    )

    @field_validator("database_provider")
    @classmethod
    def validate_database_provider(cls, v: str) -> str:
        """Normalizes the provider name to its canonical spelling."""
        canonical = _PROVIDERS.get(v.strip().lower())
        if canonical is None:
            raise ValueError(
                f"Invalid database_provider '{v}'. "
                f"Must be one of: {sorted(_PROVIDERS.values())}"
            )
        return canonical

    # ── Relational Backend ────────────────────────────────────────────────
    # Format: <dialect>+<async driver>://...
    # The default is a process-lifetime in-memory SQLite database.
    database_url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        description="Async SQLAlchemy connection URL for the relational backend",
    )

    # Pool tuning, ignored for SQLite (single shared connection)
    db_pool_size: int = Field(default=20, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Cosmos DB Backend ─────────────────────────────────────────────────
    cosmos_connection_string: str = Field(
        default="",
        description="Cosmos DB connection string (required for CosmosDb provider)",
    )
    cosmos_database_name: str = Field(default="TodoDB")
    cosmos_container_name: str = Field(default="Todos")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def uses_cosmos(self) -> bool:
        return self.database_provider == PROVIDER_COSMOS_DB


settings = Settings()
