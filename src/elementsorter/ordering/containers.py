"""Container collaborator interface.

The ordering engine never owns UI nodes. It only asks the container to place
an existing handle before another one (or at the end). Placing a handle that
is already a child moves it, mirroring DOM ``insertBefore`` semantics.

``ListContainer`` is a headless, list-backed implementation used by tests and
by hosts without a widget toolkit. It counts every placement so callers can
verify the move budget of a re-sort.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol

from .errors import ReferenceNotFoundError

__all__ = ["ElementContainer", "ListContainer"]


class ElementContainer(Protocol):
    def append_child(self, handle: Any) -> None: ...  # pragma: no cover - structural

    def insert_before(self, handle: Any, reference: Optional[Any]) -> None: ...  # pragma: no cover

    def children(self) -> List[Any]: ...  # pragma: no cover - structural


def _index_of(items: List[Any], handle: Any) -> int:
    # Identity lookup: handles may define __eq__ or be unhashable.
    for i, existing in enumerate(items):
        if existing is handle:
            return i
    return -1


class ListContainer:
    """List-backed container with DOM-like placement semantics."""

    def __init__(self, handles: Iterable[Any] = ()) -> None:
        self._children: List[Any] = []
        self.move_count = 0
        for h in handles:
            self._children.append(h)

    def append_child(self, handle: Any) -> None:
        self.insert_before(handle, None)

    def insert_before(self, handle: Any, reference: Optional[Any]) -> None:
        if reference is handle:
            # Placing a node before itself leaves it where it is.
            self.move_count += 1
            return
        current = _index_of(self._children, handle)
        if current != -1:
            self._children.pop(current)
        if reference is None:
            self._children.append(handle)
        else:
            idx = _index_of(self._children, reference)
            if idx == -1:
                if current != -1:
                    self._children.insert(current, handle)
                raise ReferenceNotFoundError(f"Reference {reference!r} is not a child")
            self._children.insert(idx, handle)
        self.move_count += 1

    def children(self) -> List[Any]:
        return list(self._children)

    def reset_move_count(self) -> None:
        self.move_count = 0

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, handle: Any) -> bool:
        return _index_of(self._children, handle) != -1
