"""Task CRUD endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from src.core.config import constants
from src.core.errors import InvalidPayloadError
from src.models.service_models import TaskQuery
from src.services import task_service
from src.services.task_store import TaskStore


router = APIRouter(prefix="/tasks", tags=["tasks"])
logger = logging.getLogger(__name__)


def get_task_store(request: Request) -> TaskStore:
    """Dependency returning the store owned by the running application."""
    return request.app.state.task_store


StoreDep = Annotated[TaskStore, Depends(get_task_store)]


async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON; an empty body reads as an empty object.

    Raises:
        InvalidPayloadError: If the body is not valid JSON
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return await request.json()
    except ValueError as e:
        logger.info("Rejected malformed JSON body", extra={"path": request.url.path})
        raise InvalidPayloadError from e


PayloadDep = Annotated[Any, Depends(read_json_body)]


@router.post("")
async def create_task(store: StoreDep, payload: PayloadDep) -> JSONResponse:
    """Create a task from the request body."""
    task = await task_service.create_task(store, payload)
    return JSONResponse(content=task.to_json(), status_code=constants.HTTP_CREATED)


@router.get("")
async def list_tasks(
    store: StoreDep,
    completed: str | None = None,
    priority: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    page: str | None = None,
    per_page: Annotated[str | None, Query(alias="perPage")] = None,
) -> JSONResponse:
    """List tasks with optional filtering, sorting and pagination."""
    query = TaskQuery(
        completed=completed,
        priority=priority,
        search=search,
        sort=sort,
        page=page,
        per_page=per_page,
    )
    result = await task_service.list_tasks(store, query)
    return JSONResponse(content=result.to_json(), status_code=constants.HTTP_OK)


@router.get("/{task_id}")
async def get_task(store: StoreDep, task_id: str) -> JSONResponse:
    """Fetch a single task."""
    task = await task_service.get_task(store, task_id)
    return JSONResponse(content=task.to_json(), status_code=constants.HTTP_OK)


@router.put("/{task_id}")
async def replace_task(store: StoreDep, task_id: str, payload: PayloadDep) -> JSONResponse:
    """Replace every mutable field of a task."""
    task = await task_service.replace_task(store, task_id, payload)
    return JSONResponse(content=task.to_json(), status_code=constants.HTTP_OK)


@router.patch("/{task_id}")
async def update_task(store: StoreDep, task_id: str, payload: PayloadDep) -> JSONResponse:
    """Update only the fields present in the request body."""
    task = await task_service.update_task(store, task_id, payload)
    return JSONResponse(content=task.to_json(), status_code=constants.HTTP_OK)


@router.delete("/{task_id}")
async def delete_task(store: StoreDep, task_id: str) -> Response:
    """Delete a task."""
    await task_service.delete_task(store, task_id)
    return Response(status_code=constants.HTTP_NO_CONTENT)
