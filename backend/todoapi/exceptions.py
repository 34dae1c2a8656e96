"""
Todo API Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios the API knows about.
How:   Each exception carries a human-readable message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into JSON
       error responses with the right HTTP status code.
Who:   Raised by storage backends, routes and the storage bootstrap.

Exception Hierarchy:
    TodoApiError (base)
    ├── NotFoundError        → 404 Not Found
    ├── StorageError         → 500 Internal Server Error
    └── ConfigurationError   → raised at startup, the app never starts serving

Note:
    "Not found" is NOT an exception inside the repository or storage layers.
    Those layers return None / False. Only the routes raise NotFoundError,
    so the 404 response is produced by the global handler.
"""

from typing import Any, Dict, Optional


class TodoApiError(Exception):
    """
    Base exception for all Todo API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(TodoApiError):
    """
    Raised by a route when the requested todo item does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(TodoApiError):
    """
    Raised when a storage backend fails for a reason other than a missing record.

    When:    Connection lost, query rejected, Cosmos service error, key mismatch.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    (SQL text, Cosmos status codes, activity ids) stay in `context` and are
    only logged server-side.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation


class ConfigurationError(TodoApiError):
    """
    Raised when the selected storage backend cannot be configured.

    When:    DATABASE_PROVIDER=CosmosDb without COSMOS_CONNECTION_STRING.
    Effect:  The lifespan startup fails before any request is accepted.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        setting: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if setting:
            ctx["setting"] = setting
        super().__init__(message=message, context=ctx)
        self.setting = setting
