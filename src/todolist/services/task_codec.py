"""Serialization of the task collection.

The persisted layout is a JSON array of task records using the keys
``id``, ``text``, ``completed``, ``priority``, ``dueDate``, ``tag`` and
``createdAt``. Decoding is tolerant: records are repaired where a sane
default exists and skipped where none does.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import ValidationError

from todolist.exceptions import StateDecodeError
from todolist.models import Task
from todolist.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize *tasks* in collection order."""
    return json.dumps([task.to_record() for task in tasks], ensure_ascii=False)


def decode_tasks(
    payload: str,
    id_generator: IdGenerator,
    now_ms: Callable[[], int],
) -> tuple[list[Task], int]:
    """Decode a persisted payload.

    Args:
        payload: Serialized collection as produced by :func:`encode_tasks`
        id_generator: Allocator for records missing an id; it also observes
            every integer id in the payload
        now_ms: Clock used for records missing ``createdAt``

    Returns:
        Tuple of (tasks in persisted order, number of skipped records)

    Raises:
        StateDecodeError: If the payload is not a JSON list
    """
    try:
        data = json.loads(payload)
    except (ValueError, TypeError, RecursionError) as e:
        raise StateDecodeError(f"payload is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise StateDecodeError(
            f"payload must be a JSON list of tasks, got {type(data).__name__}"
        )

    id_generator.observe(
        raw.get("id") for raw in data if isinstance(raw, dict) and raw.get("id") is not None
    )

    tasks: list[Task] = []
    seen: set[int | str] = set()
    skipped = 0

    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning("skipping record %d: not an object", index)
            skipped += 1
            continue

        record: dict[str, Any] = dict(raw)
        if record.get("id") in (None, ""):
            record["id"] = id_generator.next_id()
        if record.get("createdAt") is None:
            record["createdAt"] = now_ms()

        try:
            task = Task.model_validate(record)
        except ValidationError as e:
            logger.warning(
                "skipping record %d: %d validation error(s): %s",
                index,
                e.error_count(),
                e.errors()[0]["msg"],
            )
            skipped += 1
            continue

        if task.id in seen:
            logger.warning("skipping record %d: duplicate id %r", index, task.id)
            skipped += 1
            continue

        seen.add(task.id)
        tasks.append(task)

    return tasks, skipped
