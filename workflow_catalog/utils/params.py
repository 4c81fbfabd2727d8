"""Query-string helpers for the catalog's loosely typed parameters."""

import re
from collections.abc import Mapping
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# SQLite INTEGER is a signed 64-bit value; anything wider cannot be bound.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def _atoi(value: str) -> int:
    m = _LEADING_INT_RE.match(value)
    return int(m.group(1)) if m else 0


def parse_int(value: str | None) -> int | None:
    """Parse the leading integer of ``value`` the way C's ``atoi`` would.

    Returns None for an absent or empty value and 0 when no digits lead.
    The result is clamped to SQLite's INTEGER range.
    """
    if value is None or value == "":
        return None
    return max(SQLITE_INT_MIN, min(_atoi(value), SQLITE_INT_MAX))


def parse_id(value: str) -> int:
    """Parse a path or query id; 0 (never a stored id) when unusable or out of range."""
    number = _atoi(value)
    if not SQLITE_INT_MIN <= number <= SQLITE_INT_MAX:
        return 0
    return number


def indexed_int_params(params: Mapping[str, str], name: str, max_count: int) -> list[int]:
    """Collect ``name[0]`` .. ``name[max_count-1]`` as ids, skipping absent indexes."""
    values = []
    for i in range(max_count):
        raw = params.get(f"{name}[{i}]")
        if raw is not None:
            values.append(parse_id(raw))
    return values


def lenient_int(value: Any, default: int | None) -> int | None:
    """Keep ``value`` only if it is a JSON integer SQLite can store, else ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
        return default
    return value
