"""Presentation boundary between the control flow and the terminal.

``Presenter`` is the contract the app drives; ``TerminalPresenter`` is the
raw-mode implementation used by the CLI. Tests substitute scripted fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..disk_model import Volume
from ..input import read_key
from ..render import (
    ListRow,
    build_list_frame,
    build_message_frame,
    build_progress_frame,
    format_item_row,
    format_volume_row,
    list_window_height,
)
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .list_view import ABORT_KEYS, ListAction, ListCursor, handle_list_key
from .navigation import UP_ENTRY_NAME, DisplayItem

_UP_KEYS = frozenset({"BACKSPACE", "LEFT", "h"})


class Presenter(Protocol):
    def show_message(self, message: str) -> None: ...

    def show_volume_list(self, volumes: Sequence[Volume]) -> int | None: ...

    def show_progress(self, label: str, percent: int) -> None: ...

    def poll_abort(self, timeout: float) -> bool: ...

    def show_item_list(self, title: str, show_up_option: bool, items: Sequence[DisplayItem]) -> str | None: ...


class TerminalPresenter:
    """Draw frames with ``TerminalController`` and read keys from stdin."""

    def __init__(self, terminal: TerminalController, theme: UITheme = DEFAULT_THEME) -> None:
        self.terminal = terminal
        self.theme = theme

    def show_message(self, message: str) -> None:
        columns, rows = self.terminal.size()
        self.terminal.write_frame(build_message_frame(message, columns, rows, self.theme))

    def _run_list(
        self,
        title: str,
        rows: list[ListRow],
        hint: str,
        up_available: bool = False,
    ) -> int | None:
        """Interactive list loop; returns the chosen index, ``-1`` for up, ``None`` on abort."""
        cursor = ListCursor(row_count=len(rows))
        while True:
            columns, screen_rows = self.terminal.size()
            window = list_window_height(screen_rows, len(rows))
            cursor.clamp(window)
            self.terminal.write_frame(
                build_list_frame(
                    title,
                    rows,
                    cursor.cursor,
                    cursor.offset,
                    columns,
                    screen_rows,
                    self.theme,
                    hint=hint,
                )
            )
            key = read_key(self.terminal.stdin_fd)
            if up_available and key in _UP_KEYS:
                return -1
            action = handle_list_key(key, cursor, rows, window)
            if action is ListAction.ABORT:
                return None
            if action is ListAction.SELECT:
                return cursor.cursor

    def show_volume_list(self, volumes: Sequence[Volume]) -> int | None:
        rows = [ListRow(format_volume_row(volume)) for volume in volumes]
        return self._run_list("Select a volume", rows, "↑/↓ move · Enter scan · Esc quit")

    def show_progress(self, label: str, percent: int) -> None:
        columns, rows = self.terminal.size()
        self.terminal.write_frame(build_progress_frame(label, percent, columns, rows, self.theme))

    def poll_abort(self, timeout: float) -> bool:
        key = read_key(self.terminal.stdin_fd, timeout_ms=int(max(0.0, timeout) * 1000))
        return key in ABORT_KEYS

    def show_item_list(self, title: str, show_up_option: bool, items: Sequence[DisplayItem]) -> str | None:
        rows = [ListRow(format_item_row(item), selectable=item.is_dir) for item in items]
        choice = self._run_list(
            title,
            rows,
            "↑/↓ move · Enter open · Backspace up · Esc quit",
            up_available=show_up_option,
        )
        if choice is None:
            return None
        if choice < 0:
            return UP_ENTRY_NAME
        return items[choice].name


__all__ = ["Presenter", "TerminalPresenter"]
