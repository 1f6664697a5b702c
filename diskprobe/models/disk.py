"""Disk and partition snapshot models."""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

UNKNOWN = "unknown"


def _human(size: float) -> str:
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}PB"


@dataclass(frozen=True)
class Partition:
    """A partition as seen during one scan."""
    name: str                       # sda1, nvme0n1p2, dm-3
    size: int                       # MiB, truncated
    mount_point: str = ""           # empty when not mounted
    uuid: str = UNKNOWN             # partition entry UUID
    filesystem_label: str = UNKNOWN
    fs: str = UNKNOWN               # filesystem type
    path: str = ""                  # /dev/<name>
    disk: str = ""                  # /dev/<owning disk>

    @property
    def is_mounted(self) -> bool:
        return bool(self.mount_point)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Disk:
    """A block device and the partitions found on it."""
    name: str                       # sda, dm-0
    size_bytes: int                 # sectors * 512
    uuid: str = UNKNOWN             # partition table UUID
    partitions: Tuple[Partition, ...] = field(default_factory=tuple)

    @property
    def path(self) -> str:
        return f"/dev/{self.name}"

    @property
    def size_human(self) -> str:
        """Human-readable size."""
        return _human(self.size_bytes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['partitions'] = [p.to_dict() for p in self.partitions]
        return data


def all_partitions(disks: Iterable[Disk]) -> List[Partition]:
    """Flatten the partitions of every disk, keeping discovery order."""
    return [part for disk in disks for part in disk.partitions]
