"""Field resolution and single-field comparison.

Values are ordered with an explicit policy for absent and null values:
an unresolvable path (``MISSING``) sorts before ``None``, and ``None`` sorts
before every concrete value. Concrete values use their natural ordering.

Mixed incomparable types (e.g. ``"abc"`` vs ``5``) are neither less nor
greater than each other and therefore compare equal; their relative order
within a column is undefined.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..config import settings

__all__ = ["MISSING", "resolve_path", "compare_values", "compare_field"]

log = logging.getLogger(__name__)


class _Missing:
    """Singleton marking an unresolvable path; survives copy and pickle."""

    __slots__ = ()
    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self



MISSING: Any = _Missing()


def resolve_path(item: Any, path: str) -> Any:
    """Traverse *path* (dot separated) on *item*.

    Mappings are looked up by key, other objects by attribute. Returns
    ``MISSING`` when any segment cannot be resolved.

    Attribute lookup also applies to scalars, so ``"name.upper"`` on a string
    yields the bound method; such values tie with everything on comparison.
    """
    value = item
    for name in path.split(settings.PATH_DELIMITER):
        if value is None or value is MISSING:
            return MISSING
        if isinstance(value, Mapping):
            value = value.get(name, MISSING)
        else:
            value = getattr(value, name, MISSING)
    return value


def compare_values(left: Any, right: Any) -> int:
    if left is MISSING or right is MISSING:
        if left is right:
            return 0
        return -1 if left is MISSING else 1
    if left is None or right is None:
        if left is right:
            return 0
        return -1 if left is None else 1
    try:
        if left < right:
            return -1
        if left > right:
            return 1
    except TypeError:
        log.debug("Incomparable values %r and %r treated as equal", left, right)
    return 0


def compare_field(left: Any, right: Any, path: str) -> int:
    return compare_values(resolve_path(left, path), resolve_path(right, path))
