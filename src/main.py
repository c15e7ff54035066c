"""tasks-api - in-memory task tracking over HTTP."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.core.config import constants, settings
from src.core.errors import (
    ErrorMessage,
    ErrorResponse,
    InvalidPayloadError,
    TaskNotFoundError,
    TaskValidationError,
)
from src.core.logging import configure_logfire, instrument_fastapi
from src.interface.tasks_router import router as tasks_router
from src.services.task_store import TaskStore


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()
    logger.info("Tasks API running on port %s", settings.port, extra={"host": settings.host, "port": settings.port})
    yield
    # Shutdown
    logger.info("Tasks API shutting down")


async def handle_validation_error(_request: Request, exc: TaskValidationError) -> JSONResponse:
    """Report every field violation with a 400."""
    return JSONResponse(
        content=exc.to_response().model_dump(),
        status_code=constants.HTTP_BAD_REQUEST,
    )


async def handle_not_found(_request: Request, exc: TaskNotFoundError) -> JSONResponse:
    """Unknown task id."""
    logger.info("Task not found", extra={"task_id": exc.task_id})
    return JSONResponse(
        content=ErrorResponse(error=ErrorMessage.TASK_NOT_FOUND).model_dump(),
        status_code=constants.HTTP_NOT_FOUND,
    )


async def handle_invalid_payload(_request: Request, _exc: InvalidPayloadError) -> JSONResponse:
    """Body that is not JSON."""
    return JSONResponse(
        content=ErrorResponse(error=ErrorMessage.INVALID_JSON).model_dump(),
        status_code=constants.HTTP_BAD_REQUEST,
    )


async def handle_unexpected_error(request: Request, _exc: Exception) -> JSONResponse:
    """Catch-all: log the fault, return a generic 500 without details."""
    logger.exception("Unhandled error", extra={"method": request.method, "path": request.url.path})
    return JSONResponse(
        content=ErrorResponse(error=ErrorMessage.INTERNAL_ERROR).model_dump(),
        status_code=constants.HTTP_SERVER_ERROR,
    )


def create_app(store: TaskStore | None = None) -> FastAPI:
    """Build the FastAPI application with its own task store.

    Args:
        store: Store to serve; a fresh empty one when omitted
    """
    application = FastAPI(
        title="tasks-api",
        description="In-memory task tracking over HTTP",
        version="0.1.0",
        lifespan=lifespan,
    )
    application.state.task_store = store if store is not None else TaskStore()

    application.add_exception_handler(TaskValidationError, handle_validation_error)
    application.add_exception_handler(TaskNotFoundError, handle_not_found)
    application.add_exception_handler(InvalidPayloadError, handle_invalid_payload)
    application.add_exception_handler(Exception, handle_unexpected_error)

    # Instrument FastAPI with Logfire
    instrument_fastapi(application)

    # Register routers
    application.include_router(tasks_router)

    @application.get("/health")
    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint."""
        task_count = await request.app.state.task_store.count()
        return JSONResponse(content={"status": "healthy", "tasks": task_count}, status_code=constants.HTTP_OK)

    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
