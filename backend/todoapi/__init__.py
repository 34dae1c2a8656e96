"""
Todo API Backend: Application Package Initializer
===================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      TodoRepository (Policy)        │  ← Identity + field-update rules
    ├─────────────────────────────────────┤
    │     TodoStorage (Persistence)       │  ← SQLAlchemy or Cosmos DB
    └─────────────────────────────────────┘

    The active storage backend is chosen by DATABASE_PROVIDER at startup;
    routes and the repository never know which one it is.
"""

__version__ = "1.0.0"
