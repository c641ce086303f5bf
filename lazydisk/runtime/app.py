"""Control-thread flow: pick a volume, scan it, then browse the result.

The control thread never touches the filesystem. It waits on the progress
channel with a bounded wake period, redraws only when the percentage
changes, and joins the worker once completion is observed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..disk_model import DiskTree, Volume
from ..errors import NoVolumesFound, RootUnreadable, ScanCancelled
from ..sizes import human_readable_bytes
from .navigation import TreeNavigator
from .presenter import Presenter
from .progress import COMPLETE_PERCENT, ProgressChannel
from .scan_worker import ScanWorker

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_A_TERMINAL = 1
EXIT_NO_VOLUMES = 3
EXIT_ABORTED = 4
EXIT_SCAN_FAILED = 5

PROGRESS_LABEL = "Reading files"


def scan_volume(presenter: Presenter, volume: Volume, poll_interval: float) -> DiskTree:
    """Scan ``volume`` on a worker thread while drawing progress.

    Raises ``RootUnreadable`` or ``ScanCancelled`` from the worker.
    """
    channel = ProgressChannel()
    worker = ScanWorker(volume, channel)
    worker.start()

    last_drawn = -1
    while True:
        value = channel.wait_for_change(last_drawn, poll_interval)
        if value != last_drawn:
            last_drawn = value
            presenter.show_progress(PROGRESS_LABEL, value)
            if value % 10 == 0:
                logger.debug("%d%% read", value)
        if value >= COMPLETE_PERCENT:
            break
        if presenter.poll_abort(0.0):
            logger.info("Scan cancelled by user")
            worker.cancel()

    tree = worker.join()
    logger.info("Scanned %s: %s", volume.mount_path, human_readable_bytes(tree.root.size))
    return tree


def navigate(presenter: Presenter, tree: DiskTree) -> None:
    """Browse ``tree`` until the user exits the item list."""
    navigator = TreeNavigator(tree.root)
    while not navigator.exited:
        selection = presenter.show_item_list(
            navigator.title(),
            navigator.show_up_option,
            navigator.items(),
        )
        if selection is None:
            navigator.exit()
            continue
        navigator.select(selection)
        logger.debug("Now at %s (depth %d)", navigator.title(), navigator.depth)


def choose_volume(presenter: Presenter, volumes_provider: Callable[[], Sequence[Volume]]) -> Volume | None:
    """Enumerate volumes and let the user pick one.

    Raises ``NoVolumesFound`` for an empty enumeration. Returns ``None`` when
    the user leaves the picker without choosing.
    """
    presenter.show_message("Gathering volume info")
    volumes = list(volumes_provider())
    if not volumes:
        raise NoVolumesFound()
    logger.debug("%d volumes found", len(volumes))
    choice = presenter.show_volume_list(volumes)
    if choice is None:
        return None
    return volumes[choice]


def run_app(
    presenter: Presenter,
    volumes_provider: Callable[[], Sequence[Volume]],
    poll_interval: float = 0.05,
    scan_target: Volume | None = None,
) -> int:
    """Run the whole session and return the process exit code.

    ``scan_target`` skips the volume picker. Navigator invariant violations
    are not caught: they signal a presentation bug and must surface.
    """
    try:
        volume = scan_target if scan_target is not None else choose_volume(presenter, volumes_provider)
    except NoVolumesFound as exc:
        logger.error("%s", exc)
        return EXIT_NO_VOLUMES
    if volume is None:
        logger.info("Exiting at volume list")
        return EXIT_ABORTED

    logger.info("Selected %s at %s", volume.name, volume.mount_path)
    presenter.show_message("Getting all file sizes")
    try:
        tree = scan_volume(presenter, volume, poll_interval)
    except RootUnreadable as exc:
        logger.error("%s", exc)
        return EXIT_SCAN_FAILED
    except ScanCancelled as exc:
        logger.info("%s", exc)
        return EXIT_ABORTED

    navigate(presenter, tree)
    return EXIT_OK


__all__ = [
    "EXIT_ABORTED",
    "EXIT_NOT_A_TERMINAL",
    "EXIT_NO_VOLUMES",
    "EXIT_OK",
    "EXIT_SCAN_FAILED",
    "PROGRESS_LABEL",
    "choose_volume",
    "navigate",
    "run_app",
    "scan_volume",
]
