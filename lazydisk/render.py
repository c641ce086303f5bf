"""Frame builders for the progress dialog and the selection list box.

Every builder is pure: it returns the screen as a list of row strings and
leaves writing to ``TerminalController.write_frame``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import display_width, pad_to_width, sanitize, truncate
from .disk_model import Volume
from .runtime.navigation import DisplayItem
from .sizes import human_readable_bytes, used_percent
from .ui_theme import DEFAULT_THEME, UITheme

NAME_COLUMN_WIDTH = 60
SIZE_COLUMN_WIDTH = 9
VOLUME_NAME_WIDTH = 20


@dataclass(frozen=True)
class ListRow:
    """One list-box row; only selectable rows can be activated."""

    text: str
    selectable: bool = True


def format_volume_row(volume: Volume) -> str:
    """``name  used/total (used%)`` for the volume picker."""
    capacity = f"{human_readable_bytes(volume.used_space)}/{human_readable_bytes(volume.total_space)}"
    percent = used_percent(volume.total_space, volume.available_space)
    name = truncate(sanitize(volume.name), VOLUME_NAME_WIDTH)
    return f"{pad_to_width(name, VOLUME_NAME_WIDTH)} {capacity:>17} ({percent:.1f}% used)  {sanitize(str(volume.mount_path))}"


def format_item_row(item: DisplayItem, name_width: int = NAME_COLUMN_WIDTH) -> str:
    """``name  D  size`` with long names cut to ``name_width`` columns."""
    name = pad_to_width(truncate(sanitize(item.name), name_width), name_width)
    marker = "D" if item.is_dir else " "
    size = "" if item.name == ".." else human_readable_bytes(item.size)
    return f"{name} {marker} {size:>{SIZE_COLUMN_WIDTH}}"


def _box_top(width: int, title: str, theme: UITheme) -> str:
    inner = max(0, width - 2)
    label = truncate(f" {title} ", max(0, inner - 2)) if title else ""
    fill = "━" * max(0, inner - display_width(label) - 1)
    if not label:
        return f"{theme.border}┏{'━' * inner}┓{theme.reset}"
    return f"{theme.border}┏━{theme.reset}{theme.title}{label}{theme.reset}{theme.border}{fill}┓{theme.reset}"


def _box_bottom(width: int, theme: UITheme) -> str:
    return f"{theme.border}┗{'━' * max(0, width - 2)}┛{theme.reset}"


def _box_row(content: str, width: int, theme: UITheme) -> str:
    return f"{theme.border}┃{theme.reset}{pad_to_width(content, max(0, width - 2))}{theme.border}┃{theme.reset}"


def _place(box: list[str], box_width: int, columns: int, rows: int) -> list[str]:
    """Center ``box`` on a ``columns`` x ``rows`` screen."""
    left = " " * max(0, (columns - box_width) // 2)
    top = max(0, (rows - len(box)) // 2)
    return [""] * top + [left + line for line in box]


def build_progress_frame(
    label: str,
    percent: int,
    columns: int,
    rows: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Boxed progress bar spanning the terminal width."""
    width = max(12, columns - 4)
    bar_width = max(1, width - 12)
    clamped = max(0, min(100, int(percent)))
    filled = (bar_width * clamped) // 100
    bar = f"{theme.progress_bar}{'█' * filled}{theme.reset}{'░' * (bar_width - filled)}"
    box = [
        _box_top(width, label, theme),
        _box_row("", width, theme),
        _box_row(f"  {bar} {clamped:>3}%", width, theme),
        _box_row("", width, theme),
        _box_bottom(width, theme),
    ]
    return _place(box, width, columns, rows)


def build_message_frame(message: str, columns: int, rows: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Small centered dialog showing one line of text."""
    text = truncate(sanitize(message), max(1, columns - 8))
    width = display_width(text) + 6
    box = [_box_top(width, "", theme), _box_row(f"  {text}", width, theme), _box_bottom(width, theme)]
    return _place(box, width, columns, rows)


def build_list_frame(
    title: str,
    rows: list[ListRow],
    cursor: int,
    offset: int,
    columns: int,
    screen_rows: int,
    theme: UITheme = DEFAULT_THEME,
    hint: str = "↑/↓ move · Enter open · Esc back",
) -> list[str]:
    """Centered list box with a ``▶`` marker on the cursor row.

    ``offset`` is the first visible row; the caller keeps the cursor inside
    the window via ``ListCursor``.
    """
    longest = max((display_width(row.text) for row in rows), default=0)
    width = max(display_width(title) + 6, min(columns, longest + 6), 20)
    width = min(width, columns)
    visible = list_window_height(screen_rows, len(rows))
    inner = max(0, width - 4)

    box = [_box_top(width, sanitize(title), theme)]
    for idx in range(offset, min(len(rows), offset + visible)):
        row = rows[idx]
        color = theme.directory if row.selectable else theme.unselectable
        text = pad_to_width(row.text, inner)
        if idx == cursor:
            box.append(_box_row(f"▶ {theme.reverse}{text}{theme.reset}", width, theme))
        else:
            box.append(_box_row(f"  {color}{text}{theme.reset}", width, theme))
    if not rows:
        box.append(_box_row(f"  {theme.hint}(empty){theme.reset}", width, theme))
    box.append(_box_bottom(width, theme))
    box.append(f"{theme.hint}{truncate(hint, width)}{theme.reset}")
    return _place(box, width, columns, screen_rows)


def list_window_height(screen_rows: int, row_count: int) -> int:
    """Number of list rows that fit between box borders and the hint line."""
    return max(1, min(row_count, screen_rows - 3))


__all__ = [
    "ListRow",
    "build_list_frame",
    "build_message_frame",
    "build_progress_frame",
    "format_item_row",
    "format_volume_row",
    "list_window_height",
]
