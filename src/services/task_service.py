"""Task service for CRUD operations and listing."""

import logging
import uuid
from typing import Any

from src.core.config import constants
from src.core.errors import TaskValidationError
from src.core.logging import log_with_context, span
from src.domain.task import Task, TaskPayload, TaskPriority, utc_now_iso
from src.models.service_models import TaskPage, TaskQuery
from src.services.task_query import query_tasks
from src.services.task_store import TaskStore
from src.services.task_validator import validate_task_payload


logger = logging.getLogger(__name__)


def _validated_payload(payload: Any, *, for_update: bool) -> TaskPayload:
    """Run the field rules and return the typed payload, or raise with every violation."""
    errors = validate_task_payload(payload, for_update=for_update)
    if errors:
        log_with_context(
            logger,
            "info",
            "Task payload rejected",
            fields=[error.field for error in errors],
            for_update=for_update,
        )
        raise TaskValidationError(errors)
    return TaskPayload.from_payload(payload if isinstance(payload, dict) else {})


def _replace_fields(task: Task, payload: TaskPayload, now: str) -> Task:
    """Full replace: fields missing from the payload fall back to their defaults."""
    return task.model_copy(
        update={
            "title": payload.title,
            "description": payload.description or "",
            "completed": payload.completed if payload.completed is not None else False,
            "due_date": payload.due_date,
            "priority": payload.priority or TaskPriority(constants.DEFAULT_PRIORITY),
            "updated_at": now,
        }
    )


def _merge_fields(task: Task, payload: TaskPayload, now: str) -> Task:
    """Partial update: only fields the client sent are changed."""
    changes: dict[str, Any] = {
        name: getattr(payload, name)
        for name in ("title", "description", "completed", "due_date", "priority")
        if payload.is_set(name)
    }
    changes["updated_at"] = now
    return task.model_copy(update=changes)


async def find_task(store: TaskStore, task_id: str) -> Task:
    """Look up a task by id.

    Raises:
        TaskNotFoundError: If no task has that id
    """
    return await store.get(task_id)


async def create_task(store: TaskStore, payload: Any) -> Task:
    """Validate a payload and store a new task built from it.

    Args:
        store: Task store to add to
        payload: Decoded JSON request body

    Returns:
        The created task

    Raises:
        TaskValidationError: If the payload breaks any field rule
    """
    with span("task_service.create_task"):
        data = _validated_payload(payload, for_update=False)
        now = utc_now_iso()
        template = Task(id=str(uuid.uuid4()), title="", created_at=now, updated_at=now)
        task = await store.add(_replace_fields(template, data, now))

        log_with_context(logger, "info", "Created task", task_id=task.id, priority=task.priority.value)
        return task


async def list_tasks(store: TaskStore, query: TaskQuery) -> TaskPage:
    """Return one page of tasks matching the query."""
    with span("task_service.list_tasks"):
        page = query_tasks(await store.list_all(), query)
        log_with_context(
            logger,
            "info",
            "Listed tasks",
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            returned=len(page.items),
        )
        return page


async def get_task(store: TaskStore, task_id: str) -> Task:
    """Fetch a single task.

    Raises:
        TaskNotFoundError: If no task has that id
    """
    with span("task_service.get_task"):
        return await find_task(store, task_id)


async def replace_task(store: TaskStore, task_id: str, payload: Any) -> Task:
    """Overwrite every mutable field of a task (PUT semantics).

    Fields missing from the payload revert to their create-time defaults.

    Raises:
        TaskNotFoundError: If no task has that id
        TaskValidationError: If the payload breaks any field rule
    """
    with span("task_service.replace_task"):
        await find_task(store, task_id)
        data = _validated_payload(payload, for_update=False)
        now = utc_now_iso()
        task = await store.update(task_id, lambda current: _replace_fields(current, data, now))

        log_with_context(logger, "info", "Replaced task", task_id=task_id)
        return task


async def update_task(store: TaskStore, task_id: str, payload: Any) -> Task:
    """Merge the supplied fields into a task (PATCH semantics).

    ``updated_at`` is stamped even when the payload changes nothing else.

    Raises:
        TaskNotFoundError: If no task has that id
        TaskValidationError: If the payload breaks any field rule
    """
    with span("task_service.update_task"):
        await find_task(store, task_id)
        data = _validated_payload(payload, for_update=True)
        now = utc_now_iso()
        task = await store.update(task_id, lambda current: _merge_fields(current, data, now))

        log_with_context(logger, "info", "Updated task", task_id=task_id, fields=sorted(data.model_fields_set))
        return task


async def delete_task(store: TaskStore, task_id: str) -> None:
    """Remove a task permanently.

    Raises:
        TaskNotFoundError: If no task has that id
    """
    with span("task_service.delete_task"):
        await store.delete(task_id)
        log_with_context(logger, "info", "Deleted task", task_id=task_id)
