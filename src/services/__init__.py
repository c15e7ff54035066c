from src.services import (
    task_query,
    task_service,
    task_validator,
)


__all__ = [
    "task_query",
    "task_service",
    "task_validator",
]
