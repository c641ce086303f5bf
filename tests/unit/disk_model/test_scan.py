"""Tests for the iterative disk-usage scanner.

Covers size aggregation, child ordering, symlink and unreadable handling,
progress reporting, and traversal depth beyond the recursion limit.
"""

from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydisk.disk_model import DiskItem, TreeScanner, iter_items, progress_percent, scan_tree
from lazydisk.disk_model import scan as scan_module
from lazydisk.errors import RootUnreadable, ScanCancelled


def _write(path: Path, size: int) -> None:
    path.write_bytes(b"x" * size)


def _child(item: DiskItem, name: str) -> DiskItem:
    found = item.child_named(name)
    assert found is not None, name
    return found


class TreeScannerTests(unittest.TestCase):
    def test_docs_and_file_scenario_sizes_order_and_progress(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "docs").mkdir()
            _write(root / "docs" / "a.txt", 100)
            _write(root / "b.bin", 50)

            progress: list[int] = []
            tree = TreeScanner(root, used_space=150, on_progress=progress.append).scan()

            docs = _child(tree, "docs")
            self.assertEqual(docs.size, 100)
            self.assertEqual(tree.size, 150)
            self.assertEqual(tree.files_size, 50)
            self.assertEqual([child.name for child in tree.children], ["docs", "b.bin"])
            self.assertTrue(tree.is_dir)
            self.assertFalse(tree.unreadable)
            self.assertEqual(progress, sorted(progress))
            self.assertEqual(progress[-1], 100)

    def test_directory_size_is_sum_of_children_everywhere(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a" / "b" / "c").mkdir(parents=True)
            _write(root / "a" / "one", 10)
            _write(root / "a" / "b" / "two", 20)
            _write(root / "a" / "b" / "c" / "three", 30)
            (root / "empty").mkdir()

            tree = scan_tree(root, used_space=60)

            for item in iter_items(tree):
                if item.is_dir:
                    self.assertEqual(item.size, sum(child.size for child in item.children))
            self.assertEqual(tree.size, 60)
            self.assertEqual(_child(tree, "empty").size, 0)

    def test_children_sorted_directories_first_then_case_insensitive(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("beta", "Alpha"):
                (root / name).mkdir()
            for name in ("zeta.txt", "Apple.txt", "banana.txt"):
                _write(root / name, 1)

            tree = scan_tree(root, used_space=3)

            self.assertEqual(
                [child.name for child in tree.children],
                ["Alpha", "beta", "Apple.txt", "banana.txt", "zeta.txt"],
            )

    def test_symlink_to_populated_directory_is_zero_size_leaf(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            target = root / "target"
            target.mkdir()
            _write(target / "big.bin", 500)
            link = root / "link"
            try:
                link.symlink_to(target, target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks not supported")

            tree = scan_tree(root, used_space=500)

            link_item = _child(tree, "link")
            self.assertTrue(link_item.is_symlink)
            self.assertFalse(link_item.is_dir)
            self.assertEqual(link_item.size, 0)
            self.assertEqual(link_item.children, ())
            self.assertEqual(tree.size, 500)
            self.assertEqual(_child(tree, "target").size, 500)

    def test_unreadable_directory_is_empty_and_siblings_still_scan(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            locked = root / "locked"
            locked.mkdir()
            _write(locked / "secret.bin", 70)
            sibling = root / "open"
            sibling.mkdir()
            _write(sibling / "visible.bin", 30)

            real_list_directory = scan_module.list_directory

            def deny_locked(path: Path):
                if Path(path) == locked:
                    raise PermissionError(13, "Permission denied", str(path))
                return real_list_directory(path)

            with mock.patch("lazydisk.disk_model.scan.list_directory", side_effect=deny_locked):
                tree = scan_tree(root, used_space=100)

            locked_item = _child(tree, "locked")
            self.assertTrue(locked_item.unreadable)
            self.assertTrue(locked_item.is_dir)
            self.assertEqual(locked_item.children, ())
            self.assertEqual(locked_item.size, 0)
            self.assertEqual(_child(tree, "open").size, 30)
            self.assertEqual(tree.size, 30)

    def test_entry_metadata_failure_marks_leaf_unreadable(self) -> None:
        entry = mock.Mock()
        entry.path = "/nowhere/ghost"
        entry.is_symlink.return_value = False
        entry.stat.side_effect = FileNotFoundError(2, "No such file")

        item = scan_module.classify_entry(entry)

        self.assertIsNotNone(item)
        self.assertTrue(item.unreadable)
        self.assertEqual(item.size, 0)
        self.assertFalse(item.is_dir)

    def test_unreadable_root_raises_root_unreadable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(RootUnreadable) as ctx:
                scan_tree(missing, used_space=10)
            self.assertEqual(ctx.exception.path, missing)
            self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_zero_used_space_reports_100_before_scanning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            _write(root / "sub" / "f", 5)

            progress: list[int] = []
            scan_tree(root, used_space=0, on_progress=progress.append)

            self.assertEqual(progress, [100])

    def test_progress_never_decreases_and_clamps_at_100(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for idx in range(5):
                sub = root / f"d{idx}"
                sub.mkdir()
                _write(sub / "f", 40)

            progress: list[int] = []
            scan_tree(root, used_space=100, on_progress=progress.append)

            self.assertEqual(progress, sorted(progress))
            self.assertTrue(all(0 <= value <= 100 for value in progress))
            self.assertEqual(progress[-1], 100)

    def test_cancel_event_stops_at_directory_boundary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            cancel = mock.Mock()
            cancel.is_set.return_value = True

            with self.assertRaises(ScanCancelled):
                TreeScanner(root, used_space=10, cancel_event=cancel).scan()

    def test_scans_nesting_deeper_than_recursion_limit(self) -> None:
        depth = sys.getrecursionlimit() + 100
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            levels: list[Path] = []
            current = root
            try:
                for _ in range(depth):
                    current = current / "d"
                    os.mkdir(current)
                    levels.append(current)
            except OSError:
                self._remove_levels(levels)
                self.skipTest("filesystem path length limit reached")
            _write(current / "leaf.bin", 7)
            try:
                tree = scan_tree(root, used_space=7)
                walked_dirs = sum(1 for item in iter_items(tree) if item.is_dir)
            finally:
                (current / "leaf.bin").unlink()
                self._remove_levels(levels)

            self.assertEqual(tree.size, 7)
            self.assertEqual(walked_dirs, depth + 1)

    @staticmethod
    def _remove_levels(levels: list[Path]) -> None:
        for level in reversed(levels):
            os.rmdir(level)


class ProgressPercentTests(unittest.TestCase):
    def test_percent_rounds_down_and_clamps(self) -> None:
        self.assertEqual(progress_percent(0, 200), 0)
        self.assertEqual(progress_percent(199, 200), 99)
        self.assertEqual(progress_percent(500, 200), 100)

    def test_zero_used_space_is_complete(self) -> None:
        self.assertEqual(progress_percent(0, 0), 100)


if __name__ == "__main__":
    unittest.main()
