"""Background worker thread running one volume scan."""

from __future__ import annotations

import logging
import threading

from ..disk_model import DiskItem, DiskTree, TreeScanner, Volume
from ..errors import LazyDiskError
from .progress import ProgressChannel

logger = logging.getLogger(__name__)


class ScanWorker:
    """Run ``TreeScanner`` for ``volume`` on one daemon thread.

    The worker is the only writer of the tree under construction. It hands
    the frozen root to the control thread through ``join`` and marks the
    progress channel complete only after the scanner has returned, so a
    reader that observes completion can join without waiting on more I/O.
    """

    def __init__(self, volume: Volume, channel: ProgressChannel | None = None) -> None:
        self.volume = volume
        self.channel = channel if channel is not None else ProgressChannel()
        self._cancel_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._root: DiskItem | None = None
        self._error: Exception | None = None

    def _run(self) -> None:
        scanner = TreeScanner(
            self.volume.mount_path,
            self.volume.used_space,
            on_progress=self.channel.publish,
            cancel_event=self._cancel_event,
        )
        try:
            self._root = scanner.scan()
        except LazyDiskError as exc:
            logger.info("Scan of %s stopped: %s", self.volume.mount_path, exc)
            self._error = exc
        except Exception as exc:
            logger.exception("Scan of %s crashed", self.volume.mount_path)
            self._error = exc
        finally:
            self.channel.complete()
            logger.debug("Scan worker for %s done", self.volume.mount_path)

    def start(self) -> None:
        """Start the worker thread; a worker runs at most once."""
        if self._thread is not None:
            raise RuntimeError("scan worker already started")
        self._thread = threading.Thread(
            target=self._run,
            name="lazydisk-scan",
            daemon=True,
        )
        self._thread.start()

    def cancel(self) -> None:
        """Ask the scanner to stop at the next directory boundary."""
        self._cancel_event.set()

    def join(self, timeout: float | None = None) -> DiskTree:
        """Wait for the worker and return the frozen tree.

        Re-raises whatever stopped the worker, normally ``RootUnreadable``
        or ``ScanCancelled``.
        """
        if self._thread is None:
            raise RuntimeError("scan worker not started")
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise TimeoutError(f"scan of {self.volume.mount_path} still running")
        if self._error is not None:
            raise self._error
        assert self._root is not None
        return DiskTree(volume=self.volume, root=self._root)


__all__ = ["ScanWorker"]
