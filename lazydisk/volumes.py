"""Volume enumeration backed by ``psutil``.

Reports mounted partitions with their capacity figures. Partitions whose
usage cannot be read (unmounted media, permission-restricted mounts) are
skipped rather than reported with bogus numbers.
"""

from __future__ import annotations

import logging
from pathlib import Path

import psutil

from .disk_model import Volume

logger = logging.getLogger(__name__)


def _volume_name(device: str, mount_path: Path) -> str:
    """Prefer the device name; fall back to the mount point."""
    name = device.strip()
    return name if name else str(mount_path)


def list_volumes(all_partitions: bool = False) -> list[Volume]:
    """Return mounted volumes in ``psutil`` order with duplicate mounts removed."""
    volumes: list[Volume] = []
    seen: set[str] = set()
    for partition in psutil.disk_partitions(all=all_partitions):
        mountpoint = partition.mountpoint
        if not mountpoint or mountpoint in seen:
            continue
        try:
            usage = psutil.disk_usage(mountpoint)
        except OSError as exc:
            logger.debug("Skipping %s: %s", mountpoint, exc)
            continue
        seen.add(mountpoint)
        mount_path = Path(mountpoint)
        volumes.append(
            Volume(
                name=_volume_name(partition.device, mount_path),
                mount_path=mount_path,
                total_space=int(usage.total),
                available_space=int(usage.free),
            )
        )
    logger.debug("%d volumes found", len(volumes))
    return volumes


def volume_for_path(path: Path) -> Volume:
    """Describe ``path`` as a scan target using its filesystem's usage.

    The used-space figure belongs to the whole filesystem, so progress for a
    subdirectory scan stays low until the final completion signal.
    """
    target = Path(path).resolve()
    try:
        usage = psutil.disk_usage(str(target))
    except OSError as exc:
        logger.debug("No usage figures for %s: %s", target, exc)
        return Volume(name=str(target), mount_path=target, total_space=0, available_space=0)
    return Volume(
        name=str(target),
        mount_path=target,
        total_space=int(usage.total),
        available_space=int(usage.free),
    )


__all__ = ["list_volumes", "volume_for_path"]
