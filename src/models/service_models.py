"""Pydantic models for service layer inputs and return types.

These models provide type safety at service boundaries, keeping the raw
query-string values separate from the parsed page that comes back.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.domain.task import Task


class TaskQuery(BaseModel):
    """Raw list-query parameters exactly as the client sent them.

    A value of None means the parameter was absent from the query string.
    """

    completed: str | None = None
    priority: str | None = None
    search: str | None = None
    sort: str | None = None
    page: str | None = None
    per_page: str | None = Field(default=None, alias="perPage")

    model_config = ConfigDict(populate_by_name=True)


class TaskPage(BaseModel):
    """One page of the filtered and sorted task collection."""

    total: int = Field(..., description="Number of tasks matching the filters, before pagination")
    page: int
    per_page: int
    items: list[Task]

    def to_json(self) -> dict[str, Any]:
        return {
            "meta": {"total": self.total, "page": self.page, "perPage": self.per_page},
            "data": [task.to_json() for task in self.items],
        }
