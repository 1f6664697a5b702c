"""Udev runtime database reader.

Records live under ``/run/udev/data/b<major>:<minor>`` for block devices.
Only the ``E:KEY=VALUE`` property lines are of interest here, e.g.::

    S:disk/by-uuid/0d6b1c3e-...
    E:ID_FS_TYPE=ext4
    E:ID_FS_LABEL=COS_STATE
    E:ID_PART_ENTRY_UUID=5a1a9b1e-...
"""
import logging
import os
from typing import Dict, Optional

from diskprobe.core.logger import get_logger
from diskprobe.discovery.errors import AccessError, ParseError
from diskprobe.discovery.paths import Paths
from diskprobe.discovery.sysfs import read_dev_number, read_text
from diskprobe.models.disk import UNKNOWN

# Property keys
PART_TABLE_UUID = "ID_PART_TABLE_UUID"
PART_ENTRY_UUID = "ID_PART_ENTRY_UUID"
FS_LABEL = "ID_FS_LABEL"
FS_TYPE = "ID_FS_TYPE"


def parse_udev_record(text: str) -> Dict[str, str]:
    """Extract the E: properties of a udev database record."""
    info = {}
    for line in text.splitlines():
        if not line.startswith("E:"):
            continue
        key, sep, value = line[2:].partition("=")
        if sep:
            info[key] = value
    return info


class UdevDatabase:
    """Query udev device properties by device number or by sysfs name."""

    def __init__(self, paths: Paths, logger: Optional[logging.Logger] = None):
        self.paths = paths
        self.logger = logger or get_logger(__name__)
        self._records: Dict[str, Dict[str, str]] = {}

    def info(self, dev_no: str) -> Dict[str, str]:
        """Return the properties recorded for ``major:minor``.

        Raises:
            AccessError: no record exists for the device number
        """
        dev_no = dev_no.strip()
        if dev_no not in self._records:
            path = os.path.join(self.paths.run_udev_data, f"b{dev_no}")
            self.logger.debug(f"Reading udev record {path}")
            self._records[dev_no] = parse_udev_record(read_text(path, errors="replace"))
        return self._records[dev_no]

    def info_for(self, disk: str, partition: str = "") -> Dict[str, str]:
        """Return the properties for a disk, or for one of its nested partitions.

        Raises:
            AccessError: the ``dev`` attribute or the udev record is missing
            ParseError: the ``dev`` attribute is malformed
        """
        dev_path = os.path.join(self.paths.sys_block, disk, partition, "dev")
        return self.info(read_dev_number(dev_path))

    @staticmethod
    def lookup(info: Dict[str, str], key: str) -> str:
        return info.get(key, UNKNOWN)

    def property_for(self, key: str, disk: str, partition: str = "") -> str:
        """Single property lookup that degrades to ``"unknown"`` on any failure."""
        try:
            return self.lookup(self.info_for(disk, partition), key)
        except AccessError as e:
            self.logger.debug(f"No udev data for {os.path.join(disk, partition)}: {e}")
        except ParseError as e:
            self.logger.warning(f"Unusable udev data for {os.path.join(disk, partition)}: {e}")
        return UNKNOWN
