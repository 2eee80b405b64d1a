"""Decomposition parser — turns raw supervisor output into sub-tasks.

The supervisor is asked for a bare JSON array, but models regularly wrap it
in markdown fences or ignore the format entirely. Parsing is therefore
best-effort and total: anything that is not a non-empty array of objects is
reported as ``Simple`` and the caller answers the request directly.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger(__name__)

# Leading fence, optionally tagged (```json, ```JSON, ```), and trailing fence
_OPEN_FENCE_RE = re.compile(r"^\s*```[\w+-]*[ \t]*\r?\n?")
_CLOSE_FENCE_RE = re.compile(r"\r?\n?```\s*$")


@dataclass(frozen=True)
class TaskDescriptor:
    role: str
    instruction: str


@dataclass(frozen=True)
class Decomposed:
    tasks: tuple[TaskDescriptor, ...]


@dataclass(frozen=True)
class Simple:
    reason: str


Decomposition = Union[Decomposed, Simple]


def strip_fences(raw_text: str) -> str:
    """Remove a wrapping markdown code fence and surrounding whitespace.

    Only the fence at the very start and end is removed; backticks inside the
    payload (e.g. code in an instruction) are left alone.
    """
    text = _OPEN_FENCE_RE.sub("", raw_text, count=1)
    return _CLOSE_FENCE_RE.sub("", text, count=1).strip()


def _as_label(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_decomposition(raw_text: str) -> Decomposition:
    """Parse supervisor output into a Decomposed or Simple result.

    Never raises. Entries are not validated beyond being JSON objects: a
    missing ``role`` or ``instruction`` becomes an empty string and is passed
    through to the sub-agent as is.
    """
    cleaned = strip_fences(raw_text)
    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.warning("Supervisor output is not valid JSON (%s); response was: %r", e, raw_text)
        return Simple(reason="unparseable")

    if not isinstance(data, list):
        logger.warning("Supervisor output is %s, not an array; response was: %r", type(data).__name__, raw_text)
        return Simple(reason="not an array")

    if not data:
        return Simple(reason="empty")

    if not all(isinstance(item, dict) for item in data):
        logger.warning("Supervisor array contains non-object entries; response was: %r", raw_text)
        return Simple(reason="non-object entries")

    tasks = tuple(
        TaskDescriptor(role=_as_label(item.get("role")), instruction=_as_label(item.get("instruction")))
        for item in data
    )
    return Decomposed(tasks=tasks)


def parse_tasks(raw_text: str) -> list[TaskDescriptor]:
    """Flat variant of parse_decomposition: an empty list means "simple request"."""
    result = parse_decomposition(raw_text)
    if isinstance(result, Decomposed):
        return list(result.tasks)
    return []
