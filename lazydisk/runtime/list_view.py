"""Cursor and scroll bookkeeping for the selection list box."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..render import ListRow

ABORT_KEYS = frozenset({"ESC", "q", "Q", "CTRL_C"})


class ListAction(Enum):
    NONE = "none"
    SELECT = "select"
    ABORT = "abort"


@dataclass
class ListCursor:
    """Cursor index plus the first visible row of a scrolling window."""

    row_count: int
    cursor: int = 0
    offset: int = 0

    def clamp(self, window: int) -> None:
        """Keep the cursor in range and inside ``[offset, offset + window)``."""
        window = max(1, window)
        if self.row_count <= 0:
            self.cursor = 0
            self.offset = 0
            return
        self.cursor = max(0, min(self.row_count - 1, self.cursor))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + window:
            self.offset = self.cursor - window + 1
        self.offset = max(0, min(self.offset, max(0, self.row_count - window)))

    def move(self, delta: int, window: int) -> None:
        self.cursor += delta
        self.clamp(window)


def handle_list_key(key: str, cursor: ListCursor, rows: Sequence[ListRow], window: int) -> ListAction:
    """Apply one key to ``cursor``; report selection or abort requests.

    ENTER on a non-selectable row is ignored so file rows can never be
    activated.
    """
    if key in ABORT_KEYS:
        return ListAction.ABORT
    if key in {"UP", "k"}:
        cursor.move(-1, window)
    elif key in {"DOWN", "j"}:
        cursor.move(1, window)
    elif key == "PAGE_UP":
        cursor.move(-window, window)
    elif key == "PAGE_DOWN":
        cursor.move(window, window)
    elif key in {"HOME", "g"}:
        cursor.cursor = 0
        cursor.clamp(window)
    elif key in {"END", "G"}:
        cursor.cursor = cursor.row_count - 1
        cursor.clamp(window)
    elif key in {"ENTER", "RIGHT", "l"}:
        if rows and rows[cursor.cursor].selectable:
            return ListAction.SELECT
    return ListAction.NONE


__all__ = ["ABORT_KEYS", "ListAction", "ListCursor", "handle_list_key"]
