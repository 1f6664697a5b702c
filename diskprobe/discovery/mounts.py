"""Mount table reader (/proc/mounts)."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from diskprobe.core.logger import get_logger
from diskprobe.discovery.errors import DiscoveryError
from diskprobe.discovery.paths import Paths
from diskprobe.discovery.sysfs import read_text

# getmntent(3) encodes these characters in the mount point field
_OCTAL_ESCAPES = {
    "\\011": "\t",
    "\\012": "\n",
    "\\040": " ",
    "\\134": "\\",
}


@dataclass(frozen=True)
class MountEntry:
    """One mounted filesystem."""
    device: str
    mount_point: str
    fs_type: str
    options: List[str] = field(default_factory=list)


def decode_mount_point(raw: str) -> str:
    """Undo the octal escaping applied to mount points."""
    out = []
    i = 0
    while i < len(raw):
        chunk = raw[i:i + 4]
        if chunk in _OCTAL_ESCAPES:
            out.append(_OCTAL_ESCAPES[chunk])
            i += 4
        elif raw[i:i + 2] == "\\\\":
            out.append("\\")
            i += 2
        else:
            out.append(raw[i])
            i += 1
    return "".join(out)


def parse_mount_line(line: str) -> Optional[MountEntry]:
    """Parse a mount table line such as::

        /dev/sda6 / ext4 rw,relatime,errors=remount-ro 0 0

    Pseudo filesystems (proc, sysfs, tmpfs...) do not start with ``/`` and
    yield ``None``, as do truncated lines.
    """
    if not line.startswith("/"):
        return None
    fields = line.split()
    if len(fields) < 4:
        return None
    return MountEntry(
        device=fields[0],
        mount_point=decode_mount_point(fields[1]),
        fs_type=fields[2],
        options=fields[3].split(","),
    )


class MountTable:
    """Device path to (mount point, filesystem type) lookups.

    The table is read once, on first use, and reused for the lifetime of the
    instance.
    """

    def __init__(self, paths: Paths, logger: Optional[logging.Logger] = None):
        self.paths = paths
        self.logger = logger or get_logger(__name__)
        self._entries: Optional[List[MountEntry]] = None

    @property
    def entries(self) -> List[MountEntry]:
        if self._entries is None:
            self._entries = self._load()
        return self._entries

    def _load(self) -> List[MountEntry]:
        try:
            # Mount points are raw bytes apart from the octal escapes
            text = read_text(self.paths.proc_mounts, errors="replace")
        except DiscoveryError as e:
            self.logger.error(f"Failed to read mount table: {e}")
            return []
        entries = []
        for line in text.splitlines():
            entry = parse_mount_line(line)
            if entry is not None:
                entries.append(entry)
        return entries

    def lookup(self, device: str) -> Tuple[str, str]:
        """Return ``(mount_point, fs_type)`` for ``device`` or ``("", "")``.

        ``device`` may be a bare name (``sda1``) or a device path.
        """
        if not device.startswith("/dev"):
            device = f"/dev/{device}"
        for entry in self.entries:
            if entry.device == device:
                return entry.mount_point, entry.fs_type
        return "", ""
