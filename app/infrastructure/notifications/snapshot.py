"""JSON snapshots of notifications for log entries.

Snapshots never raise: self-references are replaced by ``"<cycle>"`` and
anything nested deeper than ``max_depth`` by ``"<max_depth>"``.
"""

import dataclasses
import json
from enum import Enum
from typing import Any, Mapping

DEFAULT_MAX_DEPTH = 8


def to_loggable(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Convert ``value`` into JSON-compatible primitives."""
    return _convert(value, max_depth, set())


def notification_snapshot(notification: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Serialize a notification (or any object graph) to a JSON string."""
    try:
        return json.dumps(to_loggable(notification, max_depth), default=str)
    except Exception as e:
        return json.dumps({"snapshot_error": str(e), "type": type(notification).__name__})


def _convert(value: Any, depth: int, seen: set) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return value.value
    if depth <= 0:
        return "<max_depth>"

    marker = id(value)
    if marker in seen:
        return "<cycle>"
    seen.add(marker)
    try:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            converted = {
                f.name: _convert(getattr(value, f.name, None), depth - 1, seen)
                for f in dataclasses.fields(value)
            }
            if hasattr(value, "notification_type"):
                converted["type"] = value.notification_type
            return converted
        if isinstance(value, Mapping):
            return {str(k): _convert(v, depth - 1, seen) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [_convert(v, depth - 1, seen) for v in value]
        if hasattr(value, "__dict__"):
            return {
                k: _convert(v, depth - 1, seen)
                for k, v in vars(value).items()
                if not k.startswith("_")
            }
        return str(value)
    finally:
        seen.discard(marker)
