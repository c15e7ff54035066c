"""Task domain models and enums."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TaskPriority(StrEnum):
    """How urgent a task is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def format_timestamp(value: datetime) -> str:
    """Render a datetime as a UTC ISO-8601 string with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current time as a UTC ISO-8601 string."""
    return format_timestamp(datetime.now(UTC))


def parse_due_date(value: str) -> datetime | None:
    """Parse an ISO-8601 date or date-time string into a UTC datetime.

    Naive values are read as UTC. Returns None for strings that are not ISO-8601
    and for offsets that push the instant outside the years 1-9999.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        return None


class Task(BaseModel):
    """Task record as stored and as returned to clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique task ID (uuid4)")
    title: str = Field(..., description="Task title, trimmed and non-empty")
    description: str = Field(default="", description="Detailed task description")
    completed: bool = Field(default=False, description="Whether the task is done")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")
    updated_at: str = Field(..., description="Last update timestamp (ISO format)")
    due_date: str | None = Field(default=None, description="Due date (ISO format), unset when absent")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="low, medium or high")

    def to_json(self) -> dict[str, Any]:
        """Wire representation; dueDate is omitted when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def wire_value(self, wire_name: str) -> Any:
        """Look up a field by its wire name, returning None for unknown names."""
        return self.to_json().get(wire_name)


class TaskPayload(BaseModel):
    """Write payload for create, replace and partial update.

    Every field is optional. Whether a client sent a field is tracked through
    ``model_fields_set``, so an absent field is never confused with a default.
    Construct only from payloads that already passed validation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    due_date: str | None = None
    priority: TaskPriority | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TaskPayload":
        """Build from a raw JSON object, ignoring keys that are not task fields."""
        wire_names = {info.alias or name for name, info in cls.model_fields.items()}
        return cls.model_validate({key: value for key, value in payload.items() if key in wire_names})

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        """Trim surrounding whitespace."""
        return v.strip() if v is not None else None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: str | None) -> str | None:
        """Normalize the due date to the canonical UTC timestamp form."""
        if not v:
            return None
        parsed = parse_due_date(v)
        if parsed is None:
            msg = f"Invalid due date: {v}"
            raise ValueError(msg)
        return format_timestamp(parsed)

    def is_set(self, field_name: str) -> bool:
        """Return True if the client supplied the field."""
        return field_name in self.model_fields_set
