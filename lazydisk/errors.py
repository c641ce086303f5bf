"""Error taxonomy shared by scanner, navigator, and CLI.

Only ``NoVolumesFound``, ``RootUnreadable`` and ``ScanCancelled`` cross the
core/caller boundary. Per-entry filesystem failures never raise; they show
up as ``unreadable`` flags on tree items.
"""

from __future__ import annotations

from pathlib import Path


class LazyDiskError(Exception):
    """Base class for all lazydisk errors."""


class NoVolumesFound(LazyDiskError):
    """No mounted volume with readable capacity figures was found."""

    def __init__(self, message: str = "No volumes found") -> None:
        super().__init__(message)


class RootUnreadable(LazyDiskError):
    """The scan root itself could not be opened."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot read {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ScanCancelled(LazyDiskError):
    """The scan was aborted through its cancel event."""


class NavigatorInvariantViolation(LazyDiskError):
    """Navigation request inconsistent with the frozen tree.

    Raised when the presentation layer offers a choice that does not exist
    under the current directory. Never expected in normal operation.
    """


class NotEnterable(NavigatorInvariantViolation):
    """Navigation target exists but is not a directory."""


__all__ = [
    "LazyDiskError",
    "NoVolumesFound",
    "RootUnreadable",
    "ScanCancelled",
    "NavigatorInvariantViolation",
    "NotEnterable",
]
