"""Human-readable byte formatting for list rows and status lines."""

from __future__ import annotations

_UNIT = 1024
_PREFIXES = ("k", "M", "G", "T", "P", "E")


def human_readable_bytes(num_bytes: int) -> str:
    """Format ``num_bytes`` with binary prefixes, e.g. ``512B`` or ``1.5kB``."""
    value = max(0, int(num_bytes))
    if value < _UNIT:
        return f"{value}B"
    scaled = float(value)
    prefix_idx = -1
    while scaled >= _UNIT and prefix_idx < len(_PREFIXES) - 1:
        scaled /= _UNIT
        prefix_idx += 1
    return f"{scaled:.1f}{_PREFIXES[prefix_idx]}B"


def used_percent(total_space: int, available_space: int) -> float:
    """Used share of a volume as a percentage in ``[0, 100]``."""
    if total_space <= 0:
        return 0.0
    used = max(0, total_space - available_space)
    return min(100.0, (used / total_space) * 100.0)


__all__ = ["human_readable_bytes", "used_percent"]
