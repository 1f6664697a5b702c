"""Partitions of device-mapper multipath disks.

The kernel does not nest these under the parent directory. Each partition is
its own top-level ``dm-N`` entry listed in the parent's ``holders``
directory, and only the holder's ``dm/uuid`` tells a partition mapping apart
from any other mapping stacked on the disk (LVM, crypt, ...).
"""
import os
from typing import List, Optional

from diskprobe.discovery.context import ScanContext
from diskprobe.discovery.errors import AccessError, DiscoveryError
from diskprobe.discovery.paths import Paths
from diskprobe.discovery.sysfs import MIB, list_dir, read_dev_number, read_text
from diskprobe.discovery.udev import FS_LABEL, FS_TYPE, PART_ENTRY_UUID, UdevDatabase
from diskprobe.models.disk import UNKNOWN, Partition

DM_PREFIX = "dm-"


def is_multipath_device(name: str) -> bool:
    return name.startswith(DM_PREFIX)


def looks_like_partition_uuid(uuid: str) -> bool:
    """Match dm uuids of partition mappings: ``part1-mpath-...``, ``mpath-...-part1``."""
    return (
        uuid.startswith("part")
        or "-part" in uuid
        or ("mpath" in uuid and "part" in uuid)
    )


def is_multipath_partition(name: str, paths: Paths) -> bool:
    """True when ``name`` is a dm device whose own dm uuid marks it as a partition."""
    if not is_multipath_device(name):
        return False
    try:
        uuid = read_text(os.path.join(paths.sys_block, name, "dm", "uuid"))
    except DiscoveryError:
        return False
    return looks_like_partition_uuid(uuid)


def get_multipath_partitions(disk_name: str, context: ScanContext) -> List[Partition]:
    """Return the holders of ``disk_name`` that are partition mappings."""
    logger = context.logger
    holders_path = context.sys_path(disk_name, "holders")
    logger.debug(f"Reading multipath holders {holders_path}")
    try:
        holders = list_dir(holders_path)
    except AccessError as e:
        logger.error(f"Failed to read holders directory: {e}")
        return []

    top_level = _top_level_entries(context)
    partitions = []
    for name in holders:
        if not is_multipath_device(name):
            continue
        if name not in top_level:
            logger.debug(f"Holder {name} has no entry in {context.paths.sys_block}")
            continue
        if not is_multipath_partition(name, context.paths):
            logger.debug(f"Holder {name} is not a multipath partition")
            continue

        logger.debug(f"Found multipath partition {name}")
        partition = _build_partition(disk_name, name, context)
        if partition is not None:
            partitions.append(partition)
    return partitions


def _top_level_entries(context: ScanContext) -> frozenset:
    try:
        return frozenset(list_dir(context.paths.sys_block))
    except AccessError as e:
        context.logger.debug(f"Could not list block devices: {e}")
        return frozenset()


def _build_partition(disk_name: str, name: str, context: ScanContext) -> Optional[Partition]:
    # Top-level entry, so sized like a disk rather than under the parent
    size = context.size_bytes(name)
    mount_point, fs_type = context.mounts.lookup(name)

    dev_path = context.sys_path(name, "dev")
    try:
        dev_no = read_dev_number(dev_path)
    except DiscoveryError as e:
        context.logger.error(f"Failed to read device number: {e}")
        return None

    try:
        info = context.udev.info(dev_no)
    except DiscoveryError as e:
        context.logger.error(f"Failed to get udev info for {dev_no}: {e}")
        return None

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
