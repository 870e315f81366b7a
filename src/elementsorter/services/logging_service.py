"""In-process capture of ordering activity for diagnostics panels.

``insert_elements`` and ``sort_elements`` log a DEBUG summary carrying
structured ``extra`` fields (``operation``, ``order_expression``,
``element_count``, ``moves``). ``OrderingLogService`` attaches a handler to
the ``elementsorter`` logger and keeps the most recent records as
``OrderingEvent`` values, so a host can show which inserts and resorts ran
and what they cost without configuring file logging.

Records without ordering fields (e.g. incomparable-value notices) are kept
with ``operation=None``. The library never installs handlers on its own;
hosts opt in by calling ``attach()``.
"""

from __future__ import annotations

import json
import logging
import os
from collections import deque
from dataclasses import asdict, dataclass
from threading import RLock
from typing import Deque, List, Optional

from ..config import settings

__all__ = ["OrderingEvent", "OrderingLogService"]

DEFAULT_LOGGER_NAME = "elementsorter"


@dataclass(frozen=True)
class OrderingEvent:
    operation: Optional[str]  # "insert" | "resort" | None
    order_expression: Optional[str]
    element_count: Optional[int]
    moves: Optional[int]
    level: str
    logger: str
    message: str
    created: float


class _OrderingHandler(logging.Handler):
    def __init__(self, svc: "OrderingLogService") -> None:
        super().__init__(logging.DEBUG)
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._record(
            OrderingEvent(
                operation=getattr(record, "operation", None),
                order_expression=getattr(record, "order_expression", None),
                element_count=getattr(record, "element_count", None),
                moves=getattr(record, "moves", None),
                level=record.levelname,
                logger=record.name,
                message=record.getMessage(),
                created=record.created,
            )
        )


class OrderingLogService:
    def __init__(self, capacity: Optional[int] = None) -> None:
        self._lock = RLock()
        self._events: Deque[OrderingEvent] = deque(
            maxlen=capacity if capacity is not None else settings.LOG_BUFFER_CAPACITY
        )
        self._handler = _OrderingHandler(self)
        self._logger: Optional[logging.Logger] = None
        self._previous_level = logging.NOTSET

    def attach(self, logger_name: str = DEFAULT_LOGGER_NAME) -> None:
        if self._logger is not None:
            return
        logger = logging.getLogger(logger_name)
        logger.addHandler(self._handler)
        self._previous_level = logger.level
        # Summaries are DEBUG; make sure they reach the handler.
        if logger.level == logging.NOTSET or logger.level > logging.DEBUG:
            logger.setLevel(logging.DEBUG)
        self._logger = logger

    def detach(self) -> None:
        if self._logger is None:
            return
        self._logger.removeHandler(self._handler)
        self._logger.setLevel(self._previous_level)
        self._logger = None

    @property
    def attached(self) -> bool:
        return self._logger is not None

    def _record(self, event: OrderingEvent) -> None:
        with self._lock:
            self._events.append(event)

    def events(self, operation: Optional[str] = None, *, limit: Optional[int] = None) -> List[OrderingEvent]:
        """Captured events, oldest first, optionally only one operation kind."""
        with self._lock:
            data = [e for e in self._events if operation is None or e.operation == operation]
        return data[-limit:] if limit is not None else data

    def last_resort(self) -> Optional[OrderingEvent]:
        found = self.events("resort", limit=1)
        return found[0] if found else None

    def total_moves(self, operation: Optional[str] = None) -> int:
        return sum(e.moves or 0 for e in self.events(operation))

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def export_jsonl(self, path: str | os.PathLike, *, operation: Optional[str] = None) -> int:
        """Write captured events as JSON Lines. Returns number of lines written."""
        events = self.events(operation)
        with open(path, "w", encoding="utf-8") as f:
            for e in events:
                f.write(json.dumps(asdict(e), sort_keys=True) + "\n")
        return len(events)
