"""Readers for the /sys/block pseudo-filesystem."""
import os
import re
from typing import List

from diskprobe.discovery.errors import AccessError, ParseError

SECTOR_SIZE = 512
MIB = 1024 * 1024

_DECIMAL = re.compile(r"^[0-9]+$")
_DEV_NUMBER = re.compile(r"^[0-9]+:[0-9]+$")


def read_text(path: str, errors: str = "strict") -> str:
    """Return the whitespace-stripped contents of a sysfs attribute.

    ``errors`` is the codec error handler. With the default, bytes that are
    not UTF-8 raise ``ParseError``.
    """
    try:
        with open(path, encoding="utf-8", errors=errors) as f:
            return f.read().strip()
    except OSError as e:
        raise AccessError(path, e) from e
    except UnicodeDecodeError as e:
        raw = e.object[max(e.start - 8, 0):e.end + 8]
        raise ParseError(path, raw.decode("utf-8", "replace"), "UTF-8 text") from e


def list_dir(path: str) -> List[str]:
    """Return entry names under ``path``, sorted by name."""
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        raise AccessError(path, e) from e


def read_size_bytes(path: str) -> int:
    """Read a ``size`` attribute (512-byte sectors) and return bytes."""
    contents = read_text(path)
    if not _DECIMAL.match(contents):
        raise ParseError(path, contents, "decimal sector count")
    return int(contents) * SECTOR_SIZE


def read_dev_number(path: str) -> str:
    """Read a ``dev`` attribute formatted as ``major:minor``."""
    contents = read_text(path)
    if not _DEV_NUMBER.match(contents):
        raise ParseError(path, contents, "major:minor")
    return contents
