"""
Todo API Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract of the API.
How:   FastAPI validates request bodies against these models, serializes
       responses by alias, and generates the OpenAPI document from them.

The `Todo` model doubles as the value object passed between the repository
and the storage backends, so every layer agrees on one shape:

    {"id": "3f0c...", "name": "Buy milk", "isComplete": false}
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """
    A single todo item.

    On input the `id` is accepted but ignored: create always assigns a new
    identifier and update always keeps the one from the URL path.
    Unknown fields (including Cosmos system properties such as `_etag`)
    are dropped.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {"id": "b5a6c3f0-8d1e-4c52-9a0e-2f7b1d3e4a55", "name": "Buy milk", "isComplete": False}
        },
    )

    id: Optional[str] = Field(
        default=None,
        description="Server-generated identifier (ignored on create and update)",
    )
    name: Optional[str] = Field(default=None, description="Display text")
    is_complete: bool = Field(
        default=False,
        alias="isComplete",
        description="Whether the item is done",
    )

    def to_document(self) -> dict:
        """JSON-compatible dict using the wire field names."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "todo item with ID 'abc' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check body returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    provider: str = Field(description="Active storage provider: InMemory, CosmosDb")
    storage: str = Field(description="Storage connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
