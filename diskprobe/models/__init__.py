"""Data models for diskprobe."""
from diskprobe.models.disk import UNKNOWN, Disk, Partition, all_partitions

__all__ = [
    'UNKNOWN',
    'Disk',
    'Partition',
    'all_partitions',
]
