"""
Todo API Backend: Relational Storage Backend
==============================================

What:  TodoStorage implementation over async SQLAlchemy.
How:   Each operation opens its own AsyncSession, commits on success and
       rolls back on error. Driver exceptions are wrapped in StorageError;
       missing rows are reported as None / False.
Who:   Built by database.build_storage() when DATABASE_PROVIDER=InMemory.

Query plans:
    get_all:            SELECT * FROM todos
    get_complete:       SELECT * FROM todos WHERE is_complete = true
                        (idx_todos_is_complete)
    get_by_identifier:  primary key lookup
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from todoapi.database import Base
from todoapi.exceptions import StorageError
from todoapi.models.todo import TodoRecord
from todoapi.schemas.todo import Todo
from todoapi.services.storage_base import TodoStorage

logger = logging.getLogger(__name__)


class SqlAlchemyTodoStorage(TodoStorage):
    """
    Relational todo storage.

    The engine is the process-wide handle: it is created once at startup,
    shared by every request, and disposed by close().
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        # expire_on_commit=False: rows are converted to Todo after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_schema(self) -> None:
        """Create the `todos` table if it does not exist yet."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StorageError(
                message="Could not initialize the relational schema.",
                operation="create_schema",
                context={"error_type": type(e).__name__},
            ) from e

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """
        Yield a session scoped to one storage operation.

        On success: commit. On a SQLAlchemy error: rollback and raise
        StorageError. On any other error: rollback and re-raise as-is.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Storage error during %s: %s", operation, str(e))
                raise StorageError(
                    operation=operation,
                    context={"error_type": type(e).__name__},
                ) from e
            except Exception:
                await session.rollback()
                raise

    async def get_all(self) -> List[Todo]:
        async with self._session("get_all") as session:
            result = await session.execute(select(TodoRecord))
            return [record.to_todo() for record in result.scalars().all()]

    async def get_complete(self) -> List[Todo]:
        async with self._session("get_complete") as session:
            result = await session.execute(
                select(TodoRecord).where(TodoRecord.is_complete.is_(True))
            )
            return [record.to_todo() for record in result.scalars().all()]

    async def get_by_identifier(self, todo_id: str) -> Optional[Todo]:
        async with self._session("get_by_identifier") as session:
            record = await session.get(TodoRecord, todo_id)
            return record.to_todo() if record is not None else None

    async def insert(self, todo: Todo) -> Todo:
        async with self._session("insert") as session:
            record = TodoRecord.from_todo(todo)
            session.add(record)
            # Flush inside the session so a duplicate key surfaces as StorageError
            await session.flush()
            return record.to_todo()

    async def replace(self, todo_id: str, todo: Todo) -> Optional[Todo]:
        async with self._session("replace") as session:
            record = await session.get(TodoRecord, todo_id)
            if record is None:
                return None
            record.name = todo.name
            record.is_complete = todo.is_complete
            await session.flush()
            return record.to_todo()

    async def remove_by_identifier(self, todo_id: str) -> bool:
        async with self._session("remove_by_identifier") as session:
            record = await session.get(TodoRecord, todo_id)
            if record is None:
                return False
            await session.delete(record)
            return True

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Relational storage unreachable: %s", str(e))
            return False

    async def close(self) -> None:
        await self._engine.dispose()
