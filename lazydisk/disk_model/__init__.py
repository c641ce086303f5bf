"""Domain model for scanned disk-usage trees.

This package contains non-UI primitives:
- frozen item/volume/tree datatypes
- the iterative filesystem scanner that builds them
"""

from __future__ import annotations

from .types import DiskItem, DiskTree, Volume, child_sort_key, count_items, iter_items
from .scan import ProgressCallback, TreeScanner, classify_entry, list_directory, progress_percent, scan_tree

__all__ = [
    "DiskItem",
    "DiskTree",
    "Volume",
    "child_sort_key",
    "count_items",
    "iter_items",
    "ProgressCallback",
    "TreeScanner",
    "classify_entry",
    "list_directory",
    "progress_percent",
    "scan_tree",
]
