"""Global configuration and constants for element ordering."""

from __future__ import annotations

import os
from typing import Final

DESCENDING_MARKER: Final = "DESC"
FIELD_DELIMITER: Final = ","
PATH_DELIMITER: Final = "."


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Reject empty paths / empty dotted segments when parsing order expressions.
STRICT_ORDER_EXPRESSIONS: Final = _env_flag("ELEMENTSORTER_STRICT_ORDER")
LOG_BUFFER_CAPACITY: Final = _env_int("ELEMENTSORTER_LOG_CAPACITY", 500)
