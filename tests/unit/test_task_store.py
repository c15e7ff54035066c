"""Tests for the in-memory TaskStore."""

import asyncio

import pytest

from src.core.errors import TaskNotFoundError


@pytest.mark.unit
class TestTaskStore:
    """Test suite for TaskStore."""

    async def test_add_and_get(self, task_store, make_task):
        """Test a stored task can be fetched by id."""
        task = make_task(title="Write report")
        await task_store.add(task)

        fetched = await task_store.get(task.id)

        assert fetched == task

    async def test_get_not_found(self, task_store):
        """Test fetching an unknown id raises TaskNotFoundError."""
        with pytest.raises(TaskNotFoundError, match="Task not found"):
            await task_store.get("nonexistent")

    async def test_add_rejects_duplicate_id(self, task_store, make_task):
        task = make_task()
        await task_store.add(task)

        with pytest.raises(ValueError, match="Duplicate task id"):
            await task_store.add(task)

    async def test_list_preserves_insertion_order(self, task_store, make_task):
        for title in ("c", "a", "b"):
            await task_store.add(make_task(title=title))

        tasks = await task_store.list_all()

        assert [task.title for task in tasks] == ["c", "a", "b"]

    async def test_returned_tasks_are_copies(self, task_store, make_task):
        """Test mutating a returned task does not change the stored one."""
        task = make_task(title="Original")
        added = await task_store.add(task)
        added.title = "Changed"
        task.title = "Changed too"
        listed = await task_store.list_all()
        listed[0].title = "Changed again"

        assert (await task_store.get(task.id)).title == "Original"

    async def test_update(self, task_store, make_task):
        task = make_task(title="Old")
        await task_store.add(task)

        updated = await task_store.update(task.id, lambda t: t.model_copy(update={"title": "New"}))

        assert updated.title == "New"
        assert (await task_store.get(task.id)).title == "New"

    async def test_update_keeps_id_and_created_at(self, task_store, make_task):
        task = make_task()
        await task_store.add(task)

        updated = await task_store.update(
            task.id, lambda t: t.model_copy(update={"id": "other", "created_at": "1999-01-01T00:00:00.000Z"})
        )

        assert updated.id == task.id
        assert updated.created_at == task.created_at

    async def test_update_keeps_position(self, task_store, make_task):
        tasks = [make_task(title=title) for title in ("a", "b", "c")]
        for task in tasks:
            await task_store.add(task)

        await task_store.update(tasks[1].id, lambda t: t.model_copy(update={"title": "B"}))

        assert [task.title for task in await task_store.list_all()] == ["a", "B", "c"]

    async def test_update_not_found(self, task_store):
        with pytest.raises(TaskNotFoundError):
            await task_store.update("nonexistent", lambda t: t)

    async def test_delete(self, task_store, make_task):
        task = make_task()
        await task_store.add(task)

        await task_store.delete(task.id)

        assert await task_store.count() == 0
        with pytest.raises(TaskNotFoundError):
            await task_store.get(task.id)

    async def test_delete_not_found(self, task_store):
        with pytest.raises(TaskNotFoundError):
            await task_store.delete("nonexistent")

    async def test_concurrent_updates_are_serialized(self, task_store, make_task):
        """Test concurrent read-modify-write updates never lose a change."""
        task = make_task(description="")
        await task_store.add(task)

        async def append(letter: str) -> None:
            await task_store.update(
                task.id, lambda t: t.model_copy(update={"description": t.description + letter})
            )

        await asyncio.gather(*(append(letter) for letter in "abcdefghij"))

        stored = await task_store.get(task.id)
        assert sorted(stored.description) == list("abcdefghij")
