"""Partitions nested under their disk's own sysfs directory (sda -> sda1)."""
from typing import List

from diskprobe.discovery.context import ScanContext
from diskprobe.discovery.errors import AccessError, DiscoveryError
from diskprobe.discovery.sysfs import MIB, list_dir
from diskprobe.discovery.udev import FS_LABEL, FS_TYPE, PART_ENTRY_UUID, UdevDatabase
from diskprobe.models.disk import UNKNOWN, Partition


def get_direct_partitions(disk_name: str, context: ScanContext) -> List[Partition]:
    """Return the partitions of an ordinary disk, in directory listing order."""
    logger = context.logger
    path = context.sys_path(disk_name)
    logger.debug(f"Reading disk directory {path}")
    try:
        entries = list_dir(path)
    except AccessError as e:
        logger.error(f"Failed to read disk partitions: {e}")
        return []

    partitions = []
    for name in entries:
        if not name.startswith(disk_name):
            continue
        logger.debug(f"Reading partition {name}")
        partitions.append(_build_partition(disk_name, name, context))
    return partitions


def _build_partition(disk_name: str, name: str, context: ScanContext) -> Partition:
    size = context.size_bytes(disk_name, name)
    mount_point, fs_type = context.mounts.lookup(name)

    try:
        info = context.udev.info_for(disk_name, name)
    except DiscoveryError as e:
        context.logger.debug(f"No udev data for {name}: {e}")
        info = {}

    if not fs_type:
        fs_type = UdevDatabase.lookup(info, FS_TYPE)

    return Partition(
        name=name,
        size=size // MIB,
        mount_point=mount_point,
        uuid=UdevDatabase.lookup(info, PART_ENTRY_UUID),
        filesystem_label=UdevDatabase.lookup(info, FS_LABEL),
        fs=fs_type or UNKNOWN,
        path=f"/dev/{name}",
        disk=f"/dev/{disk_name}",
    )
