"""In-memory task storage.

Tasks live only for the lifetime of the process. The store is owned by the
application (``app.state.task_store``) rather than being a module global, so
tests and alternative backends can swap it out.

Concurrency contract: every read and write takes the same ``asyncio.Lock``,
so at most one mutation runs at a time and readers always see whole records.
Callers receive copies; the store is the sole owner of its Task instances.
"""

import asyncio
from collections.abc import Callable

from src.core.errors import TaskNotFoundError
from src.domain.task import Task


class TaskStore:
    """Ordered in-memory collection of tasks keyed by id."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._tasks: list[Task] = []
        self._lock = asyncio.Lock()

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    async def add(self, task: Task) -> Task:
        """Append a new task and return a copy of it.

        Raises:
            ValueError: If a task with the same id is already stored
        """
        async with self._lock:
            if any(existing.id == task.id for existing in self._tasks):
                msg = f"Duplicate task id: {task.id}"
                raise ValueError(msg)
            stored = task.model_copy(deep=True)
            self._tasks.append(stored)
            return stored.model_copy(deep=True)

    async def get(self, task_id: str) -> Task:
        """Fetch a copy of the task with the given id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        async with self._lock:
            return self._tasks[self._index_of(task_id)].model_copy(deep=True)

    async def list_all(self) -> list[Task]:
        """Snapshot of every task in insertion order."""
        async with self._lock:
            return [task.model_copy(deep=True) for task in self._tasks]

    async def update(self, task_id: str, apply: Callable[[Task], Task]) -> Task:
        """Replace a task with ``apply(current)`` as one atomic step.

        ``apply`` receives a copy of the stored task and returns the new version;
        the id and creation time of the stored task are always kept.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        async with self._lock:
            index = self._index_of(task_id)
            current = self._tasks[index]
            updated = apply(current.model_copy(deep=True)).model_copy(
                update={"id": current.id, "created_at": current.created_at}, deep=True
            )
            self._tasks[index] = updated
            return updated.model_copy(deep=True)

    async def delete(self, task_id: str) -> None:
        """Remove the task with the given id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        async with self._lock:
            del self._tasks[self._index_of(task_id)]

    async def count(self) -> int:
        async with self._lock:
            return len(self._tasks)
