"""
Todo API Backend: Cosmos DB Storage Backend
=============================================

What:  TodoStorage implementation over an Azure Cosmos DB container.
How:   Uses the async Cosmos SDK (azure.cosmos.aio). Documents are stored in
       their wire form ({"id", "name", "isComplete"}) in a container whose
       partition key path is /id, so the partition key of every document
       equals its identifier.
Who:   Built by database.build_storage() when DATABASE_PROVIDER=CosmosDb.

Error translation:
    CosmosResourceNotFoundError (404)   → None / False
    Any other Azure SDK error           → StorageError (status code in context)
"""

import logging
from typing import Any, AsyncIterable, Dict, List, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.aio import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from todoapi.exceptions import StorageError
from todoapi.schemas.todo import Todo
from todoapi.services.storage_base import TodoStorage

logger = logging.getLogger(__name__)

COMPLETE_QUERY = "SELECT * FROM c WHERE c.isComplete = @isComplete"
PAGE_SIZE = 100


class CosmosTodoStorage(TodoStorage):
    """
    Document todo storage.

    Args:
        container: Async container proxy for the todo container.
        client: The owning CosmosClient, closed by close(). None when the
                caller manages the client's lifetime.
    """

    def __init__(self, container: ContainerProxy, client: Optional[CosmosClient] = None):
        self._container = container
        self._client = client

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str,
        database_name: str = "TodoDB",
        container_name: str = "Todos",
    ) -> "CosmosTodoStorage":
        """Create the process-wide CosmosClient and bind it to one container."""
        client = CosmosClient.from_connection_string(connection_string)
        container = client.get_database_client(database_name).get_container_client(container_name)
        return cls(container, client=client)

    def _storage_error(self, operation: str, error: AzureError) -> StorageError:
        status_code = getattr(error, "status_code", None)
        logger.error(
            "Cosmos DB error during %s (status=%s): %s",
            operation,
            status_code,
            getattr(error, "message", str(error)),
        )
        return StorageError(
            operation=operation,
            context={"error_type": type(error).__name__, "status_code": status_code},
        )

    @staticmethod
    async def _collect(items: AsyncIterable[Dict[str, Any]]) -> List[Todo]:
        return [Todo.model_validate(item) async for item in items]

    async def get_all(self) -> List[Todo]:
        try:
            return await self._collect(
                self._container.read_all_items(max_item_count=PAGE_SIZE)
            )
        except AzureError as e:
            raise self._storage_error("get_all", e) from e

    async def get_complete(self) -> List[Todo]:
        try:
            return await self._collect(
                self._container.query_items(
                    query=COMPLETE_QUERY,
                    parameters=[{"name": "@isComplete", "value": True}],
                    max_item_count=PAGE_SIZE,
                )
            )
        except AzureError as e:
            raise self._storage_error("get_complete", e) from e

    async def get_by_identifier(self, todo_id: str) -> Optional[Todo]:
        try:
            item = await self._container.read_item(item=todo_id, partition_key=todo_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise self._storage_error("get_by_identifier", e) from e
        return Todo.model_validate(item)

    async def insert(self, todo: Todo) -> Todo:
        if not todo.id:
            raise StorageError(
                message="Cannot store a todo item without an identifier.",
                operation="insert",
            )
        try:
            item = await self._container.create_item(body=todo.to_document())
        except AzureError as e:
            raise self._storage_error("insert", e) from e
        return Todo.model_validate(item)

    async def replace(self, todo_id: str, todo: Todo) -> Optional[Todo]:
        # The document's partition key is its id, so the body must carry the key
        if todo.id != todo_id:
            raise StorageError(
                message="Document identifier does not match its partition key.",
                operation="replace",
                context={"todo_id": todo_id, "body_id": todo.id},
            )
        try:
            item = await self._container.replace_item(item=todo_id, body=todo.to_document())
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise self._storage_error("replace", e) from e
        return Todo.model_validate(item)

    async def remove_by_identifier(self, todo_id: str) -> bool:
        try:
            await self._container.delete_item(item=todo_id, partition_key=todo_id)
        except CosmosResourceNotFoundError:
            return False
        except AzureError as e:
            raise self._storage_error("remove_by_identifier", e) from e
        return True

    async def ping(self) -> bool:
        try:
            await self._container.read()
            return True
        except AzureError as e:
            logger.warning("Cosmos DB unreachable: %s", str(e))
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
