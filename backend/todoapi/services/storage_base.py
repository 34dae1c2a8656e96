"""
Todo API Backend: Abstract Storage Backend Interface
======================================================

What:  Abstract base class defining the contract every storage backend fulfils.
How:   Concrete implementations inherit from TodoStorage and implement the
       raw CRUD methods against their medium.
Who:   Called by TodoRepository; built once per process by database.build_storage().

Implementations:
    - SqlAlchemyTodoStorage: relational store via async SQLAlchemy
      (in-memory SQLite by default)
    - CosmosTodoStorage: Azure Cosmos DB container partitioned on /id

Contract:
    - A missing record is a normal result: None from reads and replaces,
      False from removes. It is never raised.
    - Every other failure is wrapped in StorageError.
    - Backends apply no business rules. Identity and field policy live in
      TodoRepository.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from todoapi.schemas.todo import Todo


class TodoStorage(ABC):
    """Raw persistence operations for todo items."""

    @abstractmethod
    async def get_all(self) -> List[Todo]:
        """Return every stored item, in no particular order."""
        ...

    @abstractmethod
    async def get_complete(self) -> List[Todo]:
        """Return the items whose completion flag is set."""
        ...

    @abstractmethod
    async def get_by_identifier(self, todo_id: str) -> Optional[Todo]:
        """
        Fetch one item.

        Returns:
            The stored item, or None when no item has this identifier.
        """
        ...

    @abstractmethod
    async def insert(self, todo: Todo) -> Todo:
        """
        Persist a new item. `todo.id` must already be assigned.

        Raises:
            StorageError: Including when the identifier already exists.
        """
        ...

    @abstractmethod
    async def replace(self, todo_id: str, todo: Todo) -> Optional[Todo]:
        """
        Overwrite the stored item with `todo`.

        Returns:
            The stored item after the write, or None when no item has this
            identifier.
        """
        ...

    @abstractmethod
    async def remove_by_identifier(self, todo_id: str) -> bool:
        """Delete one item. Returns False when it did not exist."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity probe used by the health endpoint."""
        ...

    async def close(self) -> None:
        """Release the underlying client handle. Called once at shutdown."""
        return None
