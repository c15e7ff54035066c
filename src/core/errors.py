"""Error types raised by the task service and their HTTP response bodies."""

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(..., description="Wire name of the offending field")
    message: str = Field(..., description="Human-readable explanation")


class ValidationErrorResponse(BaseModel):
    """Body returned with a 400 when a payload fails validation."""

    errors: list[FieldError]


class ErrorResponse(BaseModel):
    """Body returned for not-found, malformed and internal errors."""

    error: str


class ErrorMessage:
    """Messages returned to callers."""

    TITLE_INVALID = "Title is required and must be a non-empty string."
    DESCRIPTION_INVALID = "Description must be a string."
    COMPLETED_INVALID = "Completed must be a boolean."
    DUE_DATE_INVALID = "dueDate must be a valid ISO date string."
    PRIORITY_INVALID = "Priority must be low, medium, or high."

    TASK_NOT_FOUND = "Task not found"
    INVALID_JSON = "Invalid JSON payload"
    INTERNAL_ERROR = "Internal server error"


class TaskApiError(Exception):
    """Base class for errors the HTTP layer translates into client responses."""


class TaskValidationError(TaskApiError):
    """Raised when a payload violates one or more field rules.

    Carries every violation found, not just the first.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        fields = ", ".join(error.field for error in errors)
        super().__init__(f"Invalid task payload: {fields}")

    def to_response(self) -> ValidationErrorResponse:
        return ValidationErrorResponse(errors=self.errors)


class TaskNotFoundError(TaskApiError):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(ErrorMessage.TASK_NOT_FOUND)


class InvalidPayloadError(TaskApiError):
    """Raised when a request body cannot be decoded as JSON."""

    def __init__(self) -> None:
        super().__init__(ErrorMessage.INVALID_JSON)
