"""Shared helpers for answer models.

Answer records are frozen pydantic models. Every edit produces a new record;
nothing here mutates an existing instance.
"""

import time
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from mentor_diagnosis.exceptions import InvalidAnswerPath

AnswersT = TypeVar("AnswersT", bound=BaseModel)

_last_id = 0


class FrozenModel(BaseModel):
    """Base for all answer records."""

    model_config = ConfigDict(frozen=True, extra="ignore")


def new_item_id() -> str:
    """Return a time-derived id for a new collection item.

    Ids are millisecond timestamps, bumped when two items are created within
    the same millisecond so they stay unique within a process.
    """
    global _last_id
    candidate = int(time.time() * 1000)
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return str(candidate)


def filled(value: str | None) -> bool:
    """True when a text field has non-whitespace content."""
    return bool(value and value.strip())


def longer_than(value: str | None, length: int, strip: bool = False) -> bool:
    """True when a text field has more than ``length`` characters."""
    if value is None:
        return False
    text = value.strip() if strip else value
    return len(text) > length


def set_path(answers: AnswersT, path: str, value: Any) -> AnswersT:
    """Return a copy of ``answers`` with the field at ``path`` replaced.

    Paths are dotted; list items are addressed by index
    (e.g. ``"consumption_journey.steps.2.title"``). The result is
    re-validated so nested dicts become models again.

    Raises:
        InvalidAnswerPath: If any segment of the path does not exist
    """
    keys = path.split(".")
    data = answers.model_dump()
    target: Any = data
    try:
        for key in keys[:-1]:
            target = target[int(key)] if isinstance(target, list) else target[key]
        last = keys[-1]
        if isinstance(target, list):
            target[int(last)] = value
            found = True
        else:
            found = isinstance(target, dict) and last in target
            if found:
                target[last] = value
    except (KeyError, IndexError, ValueError, TypeError) as e:
        raise InvalidAnswerPath(f"Unknown answer path: {path}") from e

    if not found:
        raise InvalidAnswerPath(f"Unknown answer path: {path}")
    return type(answers).model_validate(data)


def replace_item(items: list, item_id: str, **changes: Any) -> list:
    """Return a new list where the item with ``item_id`` has ``changes`` applied.

    The changed item is re-validated, so a wrong type raises ``ValidationError``.
    """
    return [
        type(item).model_validate({**item.model_dump(), **changes}) if item.id == item_id else item
        for item in items
    ]


def remove_item(items: list, item_id: str) -> list:
    """Return a new list without the item whose id is ``item_id``."""
    return [item for item in items if item.id != item_id]


def swap(items: list, index: int, direction: int) -> list:
    """Return a new list with ``items[index]`` swapped with its neighbour.

    ``direction`` is -1 (left/up) or +1 (right/down). Out of range moves
    return an unchanged copy.
    """
    target = index + direction
    result = list(items)
    if 0 <= index < len(result) and 0 <= target < len(result):
        result[index], result[target] = result[target], result[index]
    return result
