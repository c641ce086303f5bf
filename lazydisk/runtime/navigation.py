"""Navigation over a frozen disk tree: current directory plus ancestor stack.

This module has no UI concerns. It answers enter/up/exit requests and
exposes the display rows for the current directory.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..disk_model import DiskItem
from ..errors import NavigatorInvariantViolation, NotEnterable

UP_ENTRY_NAME = ".."


@dataclass(frozen=True)
class DisplayItem:
    """One row offered to the presentation layer."""

    name: str
    size: int
    is_dir: bool


@dataclass(frozen=True)
class NavigatorState:
    """Snapshot of ``(current, ancestors)``; items compare by identity."""

    current: DiskItem
    ancestors: tuple[DiskItem, ...]

    @property
    def at_root(self) -> bool:
        return not self.ancestors


class TreeNavigator:
    """Walk a frozen tree with an explicit ancestor stack.

    ``ancestors`` runs root first and is empty at the root. Nodes are shared
    references into the frozen tree, never copies, so ``enter(x)`` followed
    by ``up()`` restores an identical state.
    """

    def __init__(self, root: DiskItem) -> None:
        self.root = root
        self.current = root
        self._ancestors: list[DiskItem] = []
        self.exited = False

    @property
    def ancestors(self) -> tuple[DiskItem, ...]:
        return tuple(self._ancestors)

    @property
    def depth(self) -> int:
        return len(self._ancestors)

    @property
    def show_up_option(self) -> bool:
        """Whether the synthetic ``..`` row should be offered."""
        return bool(self._ancestors)

    def state(self) -> NavigatorState:
        return NavigatorState(current=self.current, ancestors=self.ancestors)

    def enter(self, name: str) -> DiskItem:
        """Descend into the child directory called ``name``.

        Raises ``NotEnterable`` for a non-directory child and
        ``NavigatorInvariantViolation`` when no such child exists; both mean
        the caller offered a choice the tree does not support.
        """
        child = self.current.child_named(name)
        if child is None:
            raise NavigatorInvariantViolation(f"{name!r} is not a child of {self.current.path}")
        if not child.is_dir:
            raise NotEnterable(f"{child.path} is not a directory")
        self._ancestors.append(self.current)
        self.current = child
        return child

    def up(self) -> bool:
        """Return to the parent directory; ``False`` when already at the root."""
        if not self._ancestors:
            return False
        self.current = self._ancestors.pop()
        return True

    def exit(self) -> None:
        """Terminal request; the owning loop stops once ``exited`` is set."""
        self.exited = True

    def select(self, name: str) -> None:
        """Apply a selection coming back from the item list."""
        if name == UP_ENTRY_NAME and self._ancestors:
            self.up()
            return
        self.enter(name)

    def title(self) -> str:
        return str(self.current.path)

    def items(self) -> list[DisplayItem]:
        """Rows for ``current.children``, prefixed with ``..`` below the root."""
        rows = [DisplayItem(child.name, child.size, child.is_dir) for child in self.current.children]
        if self._ancestors:
            rows.insert(0, DisplayItem(UP_ENTRY_NAME, 0, True))
        return rows


__all__ = [
    "UP_ENTRY_NAME",
    "DisplayItem",
    "NavigatorState",
    "TreeNavigator",
]
