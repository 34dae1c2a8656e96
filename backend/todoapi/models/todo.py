"""
Todo API Backend: Todo SQLAlchemy Model
=========================================

What:  ORM model representing the `todos` table of the relational backend.
Who:   Used by SqlAlchemyTodoStorage for CRUD and by `Base.metadata.create_all`
       when the schema is created at startup.

Table Design:
    - id: String UUID assigned by the repository (never by the database)
    - name: Optional display text of any length (TEXT)
    - is_complete: Completion flag, indexed for the GET /todoitems/complete filter
"""

from typing import Optional

from sqlalchemy import Boolean, Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from todoapi.database import Base
from todoapi.schemas.todo import Todo


class TodoRecord(Base):
    """Row form of a todo item."""

    __tablename__ = "todos"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Server-generated UUID string",
    )

    name: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Display text",
    )

    is_complete: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Completion flag",
    )

    __table_args__ = (
        Index("idx_todos_is_complete", "is_complete"),
    )

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoRecord":
        return cls(id=todo.id, name=todo.name, is_complete=todo.is_complete)

    def to_todo(self) -> Todo:
        return Todo(id=self.id, name=self.name, is_complete=self.is_complete)

    def __repr__(self) -> str:
        return f"<TodoRecord(id={self.id}, is_complete={self.is_complete})>"
