"""
Todo API Backend: Services Layer
==================================

Service Inventory:
    - TodoStorage (abstract): Interface for raw todo persistence
    - SqlAlchemyTodoStorage: Relational implementation (async SQLAlchemy)
    - CosmosTodoStorage: Document implementation (Azure Cosmos DB)
    - TodoRepository: Identity and field-update policy over a TodoStorage
"""
