"""Centralized canonical JSON serialization.

Used for every report the CLI writes (flattened schemas, lint results,
example reports) so output is byte-stable across platforms.
"""

import json
from typing import Any


def canonical_dumps(obj: Any, indent: int | None = None) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 encoding
    - Sorted keys
    - Stable separators (",", ":") unless an indent is requested
    - No trailing whitespace

    Args:
        obj: Python object to serialize
        indent: Optional indent for human-readable output

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        indent=indent,
        separators=(",", ": ") if indent is not None else (",", ":"),
        ensure_ascii=False  # UTF-8 encoding
    )
