"""Field rules for task write payloads."""

from typing import Any

from src.core.config import constants
from src.core.errors import ErrorMessage, FieldError
from src.domain.task import parse_due_date


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_valid_due_date(value: Any) -> bool:
    return isinstance(value, str) and parse_due_date(value) is not None


def validate_task_payload(payload: Any, *, for_update: bool) -> list[FieldError]:
    """Check a raw JSON payload against the task field rules.

    Every rule is checked independently and all violations are returned.
    ``title`` is required unless ``for_update`` is set and the payload omits it,
    which lets partial updates leave the title alone. A JSON ``null`` counts as
    a present value and fails its field's rule.

    Args:
        payload: Decoded request body; anything but a JSON object is treated as empty
        for_update: True for partial updates

    Returns:
        Field errors in rule order; empty when the payload is acceptable
    """
    if not isinstance(payload, dict):
        payload = {}

    errors: list[FieldError] = []

    if (not for_update or "title" in payload) and not _is_non_empty_string(payload.get("title")):
        errors.append(FieldError(field="title", message=ErrorMessage.TITLE_INVALID))

    if "description" in payload and not isinstance(payload["description"], str):
        errors.append(FieldError(field="description", message=ErrorMessage.DESCRIPTION_INVALID))

    if "completed" in payload and not isinstance(payload["completed"], bool):
        errors.append(FieldError(field="completed", message=ErrorMessage.COMPLETED_INVALID))

    if "dueDate" in payload and not _is_valid_due_date(payload["dueDate"]):
        errors.append(FieldError(field="dueDate", message=ErrorMessage.DUE_DATE_INVALID))

    if "priority" in payload and payload["priority"] not in constants.VALID_PRIORITIES:
        errors.append(FieldError(field="priority", message=ErrorMessage.PRIORITY_INVALID))

    return errors
