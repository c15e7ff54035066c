"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.domain.task import Task, TaskPriority
from src.main import create_app
from src.services.task_store import TaskStore


@pytest.fixture
def task_store() -> TaskStore:
    """Provides a fresh, empty TaskStore for each test."""
    return TaskStore()


@pytest.fixture
def test_app(task_store: TaskStore) -> FastAPI:
    """FastAPI application serving the per-test store."""
    return create_app(task_store)


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    """Create a test client for the FastAPI app."""
    return TestClient(test_app)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for Task objects with sensible defaults."""
    counter = {"next": 1}

    def _make(**overrides: Any) -> Task:
        number = counter["next"]
        counter["next"] += 1
        data: dict[str, Any] = {
            "id": f"task-{number}",
            "title": f"Task {number}",
            "description": "",
            "completed": False,
            "created_at": "2026-01-01T00:00:00.000Z",
            "updated_at": "2026-01-01T00:00:00.000Z",
            "priority": TaskPriority.MEDIUM,
        }
        data.update(overrides)
        return Task(**data)

    return _make
