"""Iterative filesystem scanner building frozen disk-usage trees.

The traversal is post-order and depth-first, driven by an explicit frontier
stack so stack usage stays flat no matter how deep the directory nesting is.
Each directory is listed eagerly and its handle closed before descending.
"""

from __future__ import annotations

import logging
import os
import stat
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import RootUnreadable, ScanCancelled
from .types import DiskItem, child_sort_key

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass
class _DirectoryFrame:
    """Directory awaiting its subdirectories' results. Worker-private."""

    path: Path
    unreadable: bool = False
    children: list[DiskItem] = field(default_factory=list)
    pending: list[Path] = field(default_factory=list)

    def freeze(self) -> DiskItem:
        """Sort resolved children and produce the immutable directory item."""
        children = tuple(sorted(self.children, key=child_sort_key))
        return DiskItem(
            path=self.path,
            children=children,
            size=sum(child.size for child in children),
            files_size=sum(child.size for child in children if not child.is_dir),
            is_dir=True,
            unreadable=self.unreadable,
        )


def classify_entry(entry: os.DirEntry) -> DiskItem | None:
    """Return a leaf item for ``entry`` or ``None`` when it is a directory.

    Symlinks are never followed and count as zero bytes. Only regular files
    carry a size; sockets, fifos and devices are zero-size leaves.
    """
    path = Path(entry.path)
    try:
        if entry.is_symlink():
            return DiskItem(path=path, is_symlink=True)
        info = entry.stat(follow_symlinks=False)
    except OSError:
        return DiskItem(path=path, unreadable=True)

    if stat.S_ISDIR(info.st_mode):
        return None
    if stat.S_ISREG(info.st_mode):
        return DiskItem(path=path, size=int(info.st_size))
    return DiskItem(path=path)


def list_directory(path: Path) -> tuple[list[DiskItem], list[Path]]:
    """List ``path`` into ``(leaf_items, subdirectory_paths)``.

    Raises ``OSError`` when the directory cannot be opened or iterated.
    """
    leaves: list[DiskItem] = []
    subdirectories: list[Path] = []
    with os.scandir(path) as entries:
        for entry in entries:
            leaf = classify_entry(entry)
            if leaf is None:
                subdirectories.append(Path(entry.path))
            else:
                leaves.append(leaf)
    return leaves, subdirectories


def progress_percent(observed_bytes: int, used_space: int) -> int:
    """Integer percentage of ``used_space`` observed so far, clamped to [0, 100]."""
    if used_space <= 0:
        return 100
    return max(0, min(100, (observed_bytes * 100) // used_space))


class TreeScanner:
    """Walk one directory tree and return its frozen root item.

    ``used_space`` is the volume's used byte count measured before the scan;
    it is only an estimate of the work ahead, so files changing during the
    scan can make the percentage drift. ``on_progress`` receives
    non-decreasing integer percentages once per finished directory.
    """

    def __init__(
        self,
        root_path: Path,
        used_space: int,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.root_path = Path(root_path)
        self.used_space = max(0, int(used_space))
        self._on_progress = on_progress
        self._cancel_event = cancel_event
        self.observed_bytes = 0
        self.directory_count = 0
        self.unreadable_directory_count = 0
        self._last_percent = -1

    def _report(self, percent: int) -> None:
        if percent < self._last_percent:
            percent = self._last_percent
        self._last_percent = percent
        if self._on_progress is not None:
            self._on_progress(percent)

    def _open_frame(self, path: Path) -> _DirectoryFrame:
        frame = _DirectoryFrame(path=path)
        try:
            leaves, subdirectories = list_directory(path)
        except OSError as exc:
            logger.debug("Unreadable directory %s: %s", path, exc)
            self.unreadable_directory_count += 1
            frame.unreadable = True
            return frame
        frame.children.extend(leaves)
        frame.pending.extend(subdirectories)
        return frame

    def _directory_done(self, item: DiskItem) -> None:
        self.directory_count += 1
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise ScanCancelled(f"Scan of {self.root_path} cancelled")
        self.observed_bytes += item.files_size
        if self.used_space > 0:
            self._report(progress_percent(self.observed_bytes, self.used_space))

    def scan(self) -> DiskItem:
        """Scan the tree and return its root.

        Raises ``RootUnreadable`` if the root cannot be listed and
        ``ScanCancelled`` if the cancel event gets set mid-scan. Every other
        failure is recorded as ``unreadable`` data on the affected item.
        """
        logger.info("Scanning %s (used space %d bytes)", self.root_path, self.used_space)
        try:
            leaves, subdirectories = list_directory(self.root_path)
        except OSError as exc:
            logger.error("Cannot read scan root %s: %s", self.root_path, exc)
            raise RootUnreadable(self.root_path, exc.strerror or str(exc)) from exc

        if self.used_space <= 0:
            self._report(100)

        root_frame = _DirectoryFrame(path=self.root_path, children=leaves, pending=subdirectories)
        frontier = [root_frame]
        root_item: DiskItem | None = None
        while frontier:
            frame = frontier[-1]
            if frame.pending:
                frontier.append(self._open_frame(frame.pending.pop()))
                continue

            frontier.pop()
            item = frame.freeze()
            self._directory_done(item)
            if frontier:
                frontier[-1].children.append(item)
            else:
                root_item = item

        assert root_item is not None
        logger.info(
            "Scan of %s finished: %d directories, %d unreadable, %d bytes",
            self.root_path,
            self.directory_count,
            self.unreadable_directory_count,
            root_item.size,
        )
        return root_item


def scan_tree(
    root_path: Path,
    used_space: int,
    on_progress: ProgressCallback | None = None,
) -> DiskItem:
    """Convenience wrapper: scan ``root_path`` with a fresh ``TreeScanner``."""
    return TreeScanner(root_path, used_space, on_progress=on_progress).scan()


__all__ = [
    "ProgressCallback",
    "TreeScanner",
    "classify_entry",
    "list_directory",
    "progress_percent",
    "scan_tree",
]
