"""
Todo API Backend: Storage Bootstrap
=====================================

What:  ORM base class, async engine construction, and the factory that builds
       the active storage backend from settings.
How:   `build_storage()` is called once from the FastAPI lifespan. It creates
       the single process-wide handle (an AsyncEngine or a CosmosClient), wraps
       it in the matching TodoStorage implementation, and returns it. The
       handle lives on `app.state.storage` until shutdown.
Who:   main.py (lifespan), tests.

Connection Pooling Strategy (relational backend):
    SQLite in-memory:  StaticPool, one connection shared by every session.
                       A second connection would see an empty database.
    Anything else:     pool_size / max_overflow / pool_pre_ping from settings,
                       connections recycled every hour.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from todoapi.config import Settings
from todoapi.exceptions import ConfigurationError
from todoapi.services.storage_base import TodoStorage

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the relational backend.

    SQL echo is enabled when LOG_LEVEL is DEBUG.
    """
    url = settings.database_url
    echo = settings.log_level == "DEBUG"

    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


async def build_storage(settings: Settings) -> TodoStorage:
    """
    Build the storage backend selected by DATABASE_PROVIDER.

    Returns:
        A ready-to-use TodoStorage. For the relational backend the `todos`
        table already exists when this returns.

    Raises:
        ConfigurationError: CosmosDb selected without a connection string.
    """
    if settings.uses_cosmos:
        from todoapi.services.cosmos_storage import CosmosTodoStorage

        if not settings.cosmos_connection_string.strip():
            raise ConfigurationError(
                message=(
                    "COSMOS_CONNECTION_STRING is required when "
                    "DATABASE_PROVIDER is CosmosDb"
                ),
                setting="cosmos_connection_string",
            )
        storage = CosmosTodoStorage.from_connection_string(
            settings.cosmos_connection_string,
            database_name=settings.cosmos_database_name,
            container_name=settings.cosmos_container_name,
        )
        logger.info(
            "Storage: Cosmos DB (database=%s, container=%s)",
            settings.cosmos_database_name,
            settings.cosmos_container_name,
        )
        return storage

    from todoapi.services.sql_storage import SqlAlchemyTodoStorage

    storage = SqlAlchemyTodoStorage(create_engine_from_settings(settings))
    await storage.create_schema()
    logger.info("Storage: relational (%s)", settings.database_url.split("://", 1)[0])
    return storage
