"""
Todo API Backend: Todo Repository (Business Rules)
====================================================

What:  The layer between the routes and the storage backend that owns the
       identity and field-update policy.
How:   Wraps one TodoStorage reference. Reads are delegated as-is; writes
       apply the policy first.

Identity policy:
    - create() discards any client id and assigns a fresh UUID4 string.
    - update() keeps the id of the stored record; the body id is ignored.

Update policy (fetch-merge-write):
    1. Read the authoritative record by id. Absent → None, no write.
    2. Copy ONLY name and is_complete from the input onto it.
    3. Replace the stored record with the merged one.

"Not found" is a return value here (None / False), never an exception.
Storage faults (StorageError) propagate unchanged.
"""

import logging
import uuid
from typing import List, Optional

from todoapi.schemas.todo import Todo
from todoapi.services.storage_base import TodoStorage

logger = logging.getLogger(__name__)

# The only fields an update may change
MUTABLE_FIELDS = ("name", "is_complete")


def generate_todo_id() -> str:
    return str(uuid.uuid4())


class TodoRepository:
    """
    Business-rule layer for todo items.

    Stateless apart from the storage reference, so one instance per request
    is cheap; every instance shares the same process-wide storage handle.
    """

    def __init__(self, storage: TodoStorage):
        self._storage = storage

    async def get_all(self) -> List[Todo]:
        return await self._storage.get_all()

    async def get_complete(self) -> List[Todo]:
        return await self._storage.get_complete()

    async def get_by_id(self, todo_id: str) -> Optional[Todo]:
        todo = await self._storage.get_by_identifier(todo_id)
        if todo is None:
            logger.debug("Todo %s not found", todo_id)
        return todo

    async def create(self, todo: Todo) -> Todo:
        """
        Store a new item under a server-generated id.

        Args:
            todo: Client input. Its `id`, if any, is ignored.

        Returns:
            The stored item, carrying the assigned id.
        """
        new_todo = todo.model_copy(update={"id": generate_todo_id()})
        created = await self._storage.insert(new_todo)
        logger.info("Todo %s created", created.id)
        return created

    async def update(self, todo_id: str, todo: Todo) -> Optional[Todo]:
        """
        Apply name / is_complete from `todo` to the stored item `todo_id`.

        Returns:
            The updated item, or None when `todo_id` does not exist.
        """
        existing = await self._storage.get_by_identifier(todo_id)
        if existing is None:
            logger.debug("Todo %s not found for update", todo_id)
            return None

        merged = existing.model_copy(
            update={field: getattr(todo, field) for field in MUTABLE_FIELDS}
        )
        updated = await self._storage.replace(todo_id, merged)
        if updated is None:
            # Removed between the read and the write
            logger.debug("Todo %s disappeared before update", todo_id)
            return None

        logger.info("Todo %s updated", todo_id)
        return updated

    async def delete(self, todo_id: str) -> bool:
        """Returns True if the item was removed, False if it did not exist."""
        deleted = await self._storage.remove_by_identifier(todo_id)
        if deleted:
            logger.info("Todo %s deleted", todo_id)
        else:
            logger.debug("Todo %s not found for delete", todo_id)
        return deleted
