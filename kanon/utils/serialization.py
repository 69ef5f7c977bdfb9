"""Shared serialization utilities.

Converts lint results (dataclasses, enums, errors) to JSON-serializable
primitives for the JSON formatter.
"""

import math
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from pathlib import PurePath
from typing import Any


def serialize_to_primitives(data: Any) -> Any:
    """Convert complex Python types to JSON-serializable primitives.

    Handles:
    - Primitives (str, int, float, bool, None): returned as-is
    - datetime: converted to ISO format string
    - Enum: converted to value
    - Paths: converted to posix strings
    - Objects with to_dict(): use that method
    - dataclass: converted to dict via asdict()
    - dict: recursively serialize keys and values
    - list/tuple/set: recursively serialize items
    - Special floats (inf, nan): converted to None

    Args:
        data: Any Python data structure.

    Returns:
        JSON-serializable data (primitives, dicts, lists only).

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Hit:
        ...     line: int
        ...     fatal: bool
        >>> serialize_to_primitives(Hit(3, False))
        {'line': 3, 'fatal': False}
    """
    if data is None:
        return None

    if isinstance(data, Enum):
        return data.value

    if isinstance(data, (str, int, bool)):
        return data

    if isinstance(data, float):
        if math.isnan(data) or math.isinf(data):
            return None
        return data

    if isinstance(data, datetime):
        return data.isoformat()

    if isinstance(data, PurePath):
        return data.as_posix()

    if hasattr(data, "to_dict"):
        return serialize_to_primitives(data.to_dict())

    if is_dataclass(data) and not isinstance(data, type):
        return serialize_to_primitives(asdict(data))

    if isinstance(data, dict):
        return {
            serialize_to_primitives(k): serialize_to_primitives(v)
            for k, v in data.items()
        }

    if isinstance(data, (list, tuple, set, frozenset)):
        return [serialize_to_primitives(item) for item in data]

    return str(data)
