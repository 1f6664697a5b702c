"""Block device scanner: disks, partitions and their identity."""
import logging
from typing import List, Optional

from diskprobe.core.logger import get_logger
from diskprobe.discovery.context import ScanContext
from diskprobe.discovery.errors import AccessError
from diskprobe.discovery.handlers import PartitionHandler
from diskprobe.discovery.multipath import is_multipath_partition
from diskprobe.discovery.paths import Paths
from diskprobe.discovery.sysfs import list_dir
from diskprobe.discovery.udev import PART_TABLE_UUID
from diskprobe.models.disk import Disk


class BlockDiscovery:
    """Walk /sys/block and build a snapshot of disks and partitions.

    Every read is best effort: an unreadable attribute degrades to 0 or
    ``"unknown"`` for that device only, and an unreadable tree root gives an
    empty result.
    """

    def __init__(self, paths: Optional[Paths] = None, logger: Optional[logging.Logger] = None):
        self.paths = paths or Paths()
        self.logger = logger or get_logger(__name__)

    def discover_disks(self) -> List[Disk]:
        """Discover all disks in the system. Each call is an independent scan."""
        context = ScanContext.create(self.paths, self.logger)
        log = self.logger

        log.debug(f"Scanning for disks in {self.paths.sys_block}")
        try:
            entries = list_dir(self.paths.sys_block)
        except AccessError as e:
            log.error(f"Failed to list block devices: {e}")
            return []

        disks = []
        for name in entries:
            log.debug(f"Reading block device {name}")

            # Picked up later through the parent's holders
            if is_multipath_partition(name, self.paths):
                log.debug(f"Skipping multipath partition {name}")
                continue

            size = context.size_bytes(name)
            if name.startswith("loop") and size == 0:
                # Unattached loop device
                continue

            handler = PartitionHandler.for_disk(name)
            disks.append(Disk(
                name=name,
                size_bytes=size,
                uuid=context.udev.property_for(PART_TABLE_UUID, name),
                partitions=tuple(handler.get_partitions(name, context)),
            ))

        return disks


def get_disks(paths: Optional[Paths] = None, logger: Optional[logging.Logger] = None) -> List[Disk]:
    """Scan the block-device tree once and return the disks found."""
    return BlockDiscovery(paths, logger).discover_disks()
