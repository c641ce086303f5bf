"""Domain datatypes for scanned volumes and their frozen disk-usage trees."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, eq=False)
class DiskItem:
    """One scanned file or directory with aggregated byte sizes.

    Items compare by identity. A finished tree never changes, so holders may
    alias any node (the navigator's ancestor stack does) without copying.
    """

    path: Path
    children: tuple["DiskItem", ...] = field(default=(), repr=False)
    size: int = 0
    files_size: int = 0
    is_dir: bool = False
    is_symlink: bool = False
    unreadable: bool = False

    @property
    def name(self) -> str:
        """Final path component, or the full path for filesystem roots."""
        return self.path.name or str(self.path)

    def child_named(self, name: str) -> DiskItem | None:
        """Return the direct child called ``name`` if present."""
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass(frozen=True)
class Volume:
    """Mounted filesystem with capacity figures in bytes."""

    name: str
    mount_path: Path
    total_space: int
    available_space: int

    def __post_init__(self) -> None:
        total = max(0, int(self.total_space))
        available = min(total, max(0, int(self.available_space)))
        object.__setattr__(self, "total_space", total)
        object.__setattr__(self, "available_space", available)

    @property
    def used_space(self) -> int:
        """Bytes in use; denominator for scan progress."""
        return self.total_space - self.available_space


@dataclass(frozen=True)
class DiskTree:
    """Completed scan: the volume plus its frozen root item."""

    volume: Volume
    root: DiskItem


def child_sort_key(item: DiskItem) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then exact name."""
    name = item.name
    return (not item.is_dir, name.lower(), name)


def iter_items(root: DiskItem) -> Iterator[DiskItem]:
    """Yield ``root`` and all descendants in pre-order without recursion."""
    stack = [root]
    while stack:
        item = stack.pop()
        yield item
        stack.extend(reversed(item.children))


def count_items(root: DiskItem) -> int:
    """Return the number of items in the tree rooted at ``root``."""
    return sum(1 for _item in iter_items(root))


__all__ = [
    "DiskItem",
    "Volume",
    "DiskTree",
    "child_sort_key",
    "iter_items",
    "count_items",
]
