"""Partition discovery strategy, chosen once per disk from its name."""
from enum import Enum
from typing import List

from diskprobe.discovery.context import ScanContext
from diskprobe.discovery.direct import get_direct_partitions
from diskprobe.discovery.multipath import get_multipath_partitions, is_multipath_device
from diskprobe.models.disk import Partition


class PartitionHandler(Enum):
    """How a disk exposes its partitions in /sys/block."""
    DIRECT = "direct"          # nested: sda/sda1
    MULTIPATH = "multipath"    # sibling dm-N entries linked through holders/

    @classmethod
    def for_disk(cls, disk_name: str) -> "PartitionHandler":
        if is_multipath_device(disk_name):
            return cls.MULTIPATH
        return cls.DIRECT

    def get_partitions(self, disk_name: str, context: ScanContext) -> List[Partition]:
        if self is PartitionHandler.MULTIPATH:
            return get_multipath_partitions(disk_name, context)
        return get_direct_partitions(disk_name, context)
