"""Display-width measurement and line shaping for terminal rows.

Styled rows carry ANSI escape sequences that occupy no columns, and file
names may contain wide or combining characters; these helpers keep boxes
aligned regardless.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
ELLIPSIS = "…"


def char_display_width(ch: str) -> int:
    """Terminal columns used by ``ch``: 0 for combining marks, 2 for wide."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` with ANSI sequences ignored."""
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def sanitize(text: str) -> str:
    """Replace control characters (possible in file names) with ``?``."""
    return "".join(ch if ch.isprintable() else "?" for ch in text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        w = char_display_width(text[i])
        if col + w > max_cols:
            break
        out.append(text[i])
        col += w
        i += 1
    return "".join(out)


def truncate(text: str, max_cols: int) -> str:
    """Fit plain ``text`` into ``max_cols`` columns, ending with ``…`` if cut."""
    if max_cols <= 0:
        return ""
    if display_width(text) <= max_cols:
        return text
    return clip_ansi_line(text, max_cols - 1) + ELLIPSIS


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces to exactly ``width`` visible columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
