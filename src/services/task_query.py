"""Filter, sort and paginate task listings.

The stages always run in that order and never touch the store: ``query_tasks``
is a pure function of the task list and the raw query parameters.
"""

import math
from collections.abc import Iterable
from functools import cmp_to_key
from typing import Any

from src.core.config import constants
from src.domain.task import Task
from src.models.service_models import TaskPage, TaskQuery


def filter_tasks(tasks: Iterable[Task], query: TaskQuery) -> list[Task]:
    """Apply the completed, priority and search filters (ANDed together).

    ``completed`` selects ``True`` only for the literal string "true"; any other
    value that is present selects ``False``. Empty ``priority`` and ``search``
    values are ignored.
    """
    result = list(tasks)

    if query.completed is not None:
        wanted = query.completed == "true"
        result = [task for task in result if task.completed == wanted]

    if query.priority:
        result = [task for task in result if task.priority == query.priority]

    if query.search:
        needle = query.search.lower()
        result = [task for task in result if needle in f"{task.title} {task.description}".lower()]

    return result


def parse_sort(sort: str | None) -> tuple[str, int] | None:
    """Split ``field:dir`` into the field name and a direction sign.

    Only the literal "desc" sorts descending; anything else is ascending.
    """
    if not sort:
        return None
    field, _, direction = sort.partition(":")
    return field, -1 if direction.split(":")[0] == constants.SORT_DESC else 1


def _compare_values(left: Any, right: Any, direction: int) -> int:
    # Falsy values ("", False, unset) count as absent. An absent left value
    # orders before a present one, and that ordering flips with direction.
    if not left and not right:
        return 0
    if not left:
        return -1 * direction
    if not right:
        return 1 * direction
    if left == right:
        return 0
    return (1 if left > right else -1) * direction


def sort_tasks(tasks: list[Task], sort: str | None) -> list[Task]:
    """Stable sort on a wire field name; unknown fields leave the order unchanged."""
    parsed = parse_sort(sort)
    if parsed is None:
        return list(tasks)

    field, direction = parsed
    keyed = [(task.wire_value(field), task) for task in tasks]
    keyed = sorted(keyed, key=cmp_to_key(lambda a, b: _compare_values(a[0], b[0], direction)))
    return [task for _, task in keyed]


def _parse_number(raw: str | None, default: int) -> float:
    """Read a numeric query value; missing, non-numeric, zero or NaN means default.

    Infinite values are returned as-is so the caller's bounds can clamp them.
    """
    if raw is None:
        return default
    try:
        value = float(raw) if raw.strip() else 0.0
    except ValueError:
        return default
    if value == 0 or math.isnan(value):
        return default
    return value


def parse_page(raw: str | None) -> int:
    value = max(1, _parse_number(raw, constants.DEFAULT_PAGE))
    # Infinite pages fall back to the default.
    return int(value) if math.isfinite(value) else constants.DEFAULT_PAGE


def parse_per_page(raw: str | None) -> int:
    return int(min(constants.MAX_PER_PAGE, max(1, _parse_number(raw, constants.DEFAULT_PER_PAGE))))


def query_tasks(tasks: Iterable[Task], query: TaskQuery) -> TaskPage:
    """Filter, then sort, then paginate.

    Args:
        tasks: Full task collection in store order
        query: Raw query parameters

    Returns:
        The requested page; ``total`` counts the filtered tasks before slicing
    """
    filtered = filter_tasks(tasks, query)
    ordered = sort_tasks(filtered, query.sort)

    page = parse_page(query.page)
    per_page = parse_per_page(query.per_page)
    start = (page - 1) * per_page

    return TaskPage(
        total=len(ordered),
        page=page,
        per_page=per_page,
        items=ordered[start : start + per_page],
    )
