"""
Todo API Backend: API Routes Package
======================================

Route Inventory:
    - todos.py:   GET    /todoitems             (all items)
                  GET    /todoitems/complete    (completed items)
                  GET    /todoitems/{id}        (single item)
                  POST   /todoitems             (create)
                  PUT    /todoitems/{id}        (update name / isComplete)
                  DELETE /todoitems/{id}        (delete)
    - health.py:  GET    /health                (storage health check)

Routes are thin: they call the TodoRepository and translate its results
into status codes. Identity and field rules live in the repository.
"""
