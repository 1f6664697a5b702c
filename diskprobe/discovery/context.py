"""Per-scan state shared by the disk enumerator and partition handlers."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from diskprobe.core.logger import get_logger
from diskprobe.discovery.errors import DiscoveryError
from diskprobe.discovery.mounts import MountTable
from diskprobe.discovery.paths import Paths
from diskprobe.discovery.sysfs import read_size_bytes
from diskprobe.discovery.udev import UdevDatabase


@dataclass
class ScanContext:
    """Readers for one scan. Never share an instance between concurrent scans."""
    paths: Paths
    udev: UdevDatabase
    mounts: MountTable
    logger: logging.Logger

    @classmethod
    def create(cls, paths: Paths, logger: Optional[logging.Logger] = None) -> "ScanContext":
        logger = logger or get_logger("diskprobe.discovery")
        return cls(
            paths=paths,
            udev=UdevDatabase(paths, logger),
            mounts=MountTable(paths, logger),
            logger=logger,
        )

    def sys_path(self, *parts: str) -> str:
        return os.path.join(self.paths.sys_block, *parts)

    def size_bytes(self, *parts: str) -> int:
        """Byte size of ``<sys_block>/<parts...>/size``, 0 if unreadable."""
        path = self.sys_path(*parts, "size")
        self.logger.debug(f"Reading size {path}")
        try:
            return read_size_bytes(path)
        except DiscoveryError as e:
            self.logger.error(f"Failed to read size: {e}")
            return 0
