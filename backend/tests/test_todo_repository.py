"""
Todo API Backend: Todo Repository Unit Tests
==============================================

What:  Tests for the identity and field-update policy in TodoRepository.
How:   Uses a mock storage backend (no database needed).

What we test:
    ✅ Reads are delegated to storage
    ✅ Create always assigns a fresh server id
    ✅ Update is fetch-merge-write and never changes the id
    ✅ Not-found is a return value, storage faults propagate
"""

import uuid

import pytest

from todoapi.exceptions import StorageError
from todoapi.schemas.todo import Todo
from todoapi.services.todo_repository import TodoRepository


def _echo_insert(todo):
    return todo


def _echo_replace(todo_id, todo):
    return todo


class TestTodoRepositoryRead:
    """Tests for get_all, get_complete and get_by_id."""

    @pytest.mark.asyncio
    async def test_get_all_returns_all_todos(self, mock_storage):
        expected = [
            Todo(id="1", name="Test Todo 1", is_complete=False),
            Todo(id="2", name="Test Todo 2", is_complete=True),
        ]
        mock_storage.get_all.return_value = expected

        result = await TodoRepository(mock_storage).get_all()

        assert result == expected
        mock_storage.get_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_complete_returns_complete_todos(self, mock_storage):
        expected = [Todo(id="1", name="Completed Todo", is_complete=True)]
        mock_storage.get_complete.return_value = expected

        result = await TodoRepository(mock_storage).get_complete()

        assert result == expected
        mock_storage.get_complete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_by_id_found(self, mock_storage):
        expected = Todo(id="1", name="Test Todo")
        mock_storage.get_by_identifier.return_value = expected

        result = await TodoRepository(mock_storage).get_by_id("1")

        assert result == expected
        mock_storage.get_by_identifier.assert_awaited_once_with("1")

    @pytest.mark.asyncio
    async def test_get_by_id_not_found_returns_none(self, mock_storage):
        mock_storage.get_by_identifier.return_value = None

        result = await TodoRepository(mock_storage).get_by_id("nonexistent")

        assert result is None

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, mock_storage):
        mock_storage.get_all.side_effect = StorageError(operation="get_all")

        with pytest.raises(StorageError):
            await TodoRepository(mock_storage).get_all()


class TestTodoRepositoryCreate:
    """Tests for server-side id assignment."""

    @pytest.mark.asyncio
    async def test_create_ignores_client_id(self, mock_storage):
        mock_storage.insert.side_effect = _echo_insert
        client_todo = Todo(id="client-provided-id", name="Test Todo", is_complete=False)

        result = await TodoRepository(mock_storage).create(client_todo)

        assert result.id != "client-provided-id"
        assert str(uuid.UUID(result.id)) == result.id
        assert result.name == "Test Todo"
        assert result.is_complete is False

        mock_storage.insert.assert_awaited_once()
        stored = mock_storage.insert.await_args.args[0]
        assert stored.id == result.id

    @pytest.mark.asyncio
    async def test_create_assigns_id_when_absent(self, mock_storage):
        mock_storage.insert.side_effect = _echo_insert

        result = await TodoRepository(mock_storage).create(Todo(name="No id"))

        assert result.id

    @pytest.mark.asyncio
    async def test_created_ids_are_unique(self, mock_storage):
        mock_storage.insert.side_effect = _echo_insert
        repository = TodoRepository(mock_storage)

        ids = [
            (await repository.create(Todo(id="same", name=f"Todo {i}"))).id
            for i in range(25)
        ]

        assert len(set(ids)) == 25
        assert "same" not in ids

    @pytest.mark.asyncio
    async def test_create_does_not_mutate_input(self, mock_storage):
        mock_storage.insert.side_effect = _echo_insert
        client_todo = Todo(id="client-provided-id", name="Test Todo")

        await TodoRepository(mock_storage).create(client_todo)

        assert client_todo.id == "client-provided-id"


class TestTodoRepositoryUpdate:
    """Tests for fetch-merge-write updates."""

    @pytest.mark.asyncio
    async def test_update_only_allowed_fields(self, mock_storage):
        mock_storage.get_by_identifier.return_value = Todo(
            id="existing-id", name="Old Name", is_complete=False
        )
        mock_storage.replace.side_effect = _echo_replace
        body = Todo(id="hacker-id", name="New Name", is_complete=True)

        result = await TodoRepository(mock_storage).update("existing-id", body)

        assert result == Todo(id="existing-id", name="New Name", is_complete=True)
        mock_storage.get_by_identifier.assert_awaited_once_with("existing-id")
        mock_storage.replace.assert_awaited_once_with(
            "existing-id",
            Todo(id="existing-id", name="New Name", is_complete=True),
        )

    @pytest.mark.asyncio
    async def test_update_keeps_fields_outside_the_mutable_set(self, mock_storage):
        """Fields other than name / is_complete come from the stored record."""

        class RankedTodo(Todo):
            priority: int = 0

        mock_storage.get_by_identifier.return_value = RankedTodo(
            id="existing-id", name="Old", is_complete=False, priority=5
        )
        mock_storage.replace.side_effect = _echo_replace
        body = RankedTodo(id="other", name="New", is_complete=True, priority=1)

        result = await TodoRepository(mock_storage).update("existing-id", body)

        assert result.priority == 5
        assert result.name == "New"
        assert result.is_complete is True
        assert result.id == "existing-id"

    @pytest.mark.asyncio
    async def test_update_not_found_skips_write(self, mock_storage):
        mock_storage.get_by_identifier.return_value = None

        result = await TodoRepository(mock_storage).update(
            "nonexistent", Todo(id="hacker-id", name="New Name", is_complete=True)
        )

        assert result is None
        mock_storage.replace.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_returns_none_when_removed_before_write(self, mock_storage):
        mock_storage.get_by_identifier.return_value = Todo(id="gone", name="x")
        mock_storage.replace.return_value = None

        result = await TodoRepository(mock_storage).update("gone", Todo(name="y"))

        assert result is None


class TestTodoRepositoryDelete:
    """Tests for delete results."""

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_storage):
        mock_storage.remove_by_identifier.return_value = True

        assert await TodoRepository(mock_storage).delete("1") is True
        mock_storage.remove_by_identifier.assert_awaited_once_with("1")

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, mock_storage):
        mock_storage.remove_by_identifier.return_value = False

        assert await TodoRepository(mock_storage).delete("nonexistent") is False

    @pytest.mark.asyncio
    async def test_delete_twice(self, sql_storage):
        repository = TodoRepository(sql_storage)
        created = await repository.create(Todo(name="Once"))

        assert await repository.delete(created.id) is True
        assert await repository.delete(created.id) is False


class TestTodoRepositoryOverRelationalStorage:
    """Repository behaviour end-to-end on the real relational backend."""

    @pytest.mark.asyncio
    async def test_complete_is_subset_of_all(self, sql_storage):
        repository = TodoRepository(sql_storage)
        for i in range(6):
            await repository.create(Todo(name=f"Todo {i}", is_complete=i % 2 == 0))

        all_todos = await repository.get_all()
        complete = await repository.get_complete()

        all_ids = {todo.id for todo in all_todos}
        assert len(complete) == 3
        assert all(todo.is_complete for todo in complete)
        assert {todo.id for todo in complete} <= all_ids
        incomplete_ids = {todo.id for todo in all_todos if not todo.is_complete}
        assert incomplete_ids.isdisjoint({todo.id for todo in complete})

    @pytest.mark.asyncio
    async def test_update_returns_path_id(self, sql_storage):
        repository = TodoRepository(sql_storage)
        created = await repository.create(Todo(name="Walk dog"))

        updated = await repository.update(
            created.id, Todo(id="evil", name="Walk cat", is_complete=True)
        )

        assert updated == Todo(id=created.id, name="Walk cat", is_complete=True)
        assert await repository.get_by_id("evil") is None
        assert await repository.get_by_id(created.id) == updated
