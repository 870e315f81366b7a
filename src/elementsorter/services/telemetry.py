"""Operation counters for ordering diagnostics.

``SortedElementList`` reports into a ``TelemetryService`` when one is passed:

 - ``insert.elements``: handles placed by incremental insertion
 - ``resort.runs``: full resorts performed
 - ``resort.moves``: container placements issued by resorts

Counting is off unless ``enabled`` is True so a shared instance can stay
wired in production at no cost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Dict

__all__ = ["TelemetryService"]


@dataclass
class TelemetryService:
    enabled: bool = False
    _counters: Dict[str, int] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def increment(self, name: str, delta: int = 1) -> None:
        """Add `delta` to counter `name` (no-op if disabled or delta is 0)."""
        if not self.enabled or delta == 0:
            return
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + int(delta)

    def get(self, name: str) -> int:
        return int(self._counters.get(name, 0))

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()

    def moves_per_resort(self) -> float:
        """Average placements per resort; 0.0 before the first resort."""
        with self._lock:
            runs = self._counters.get("resort.runs", 0)
            moves = self._counters.get("resort.moves", 0)
        return moves / runs if runs else 0.0
