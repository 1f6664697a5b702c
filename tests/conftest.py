"""Shared test fixtures: a synthetic /sys/block, udev database and mount table."""
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

from diskprobe.discovery.paths import Paths


class FakeHost:
    """Builds a captured-host layout under a temporary root."""

    def __init__(self, root: Path):
        self.root = root
        self.sys_block = root / "sys" / "block"
        self.udev_data = root / "run" / "udev" / "data"
        self.mounts_file = root / "proc" / "mounts"
        self.sys_block.mkdir(parents=True)
        self.udev_data.mkdir(parents=True)
        self.mounts_file.parent.mkdir(parents=True)
        self.mounts_file.write_text("")

    @property
    def paths(self) -> Paths:
        return Paths.with_prefix(str(self.root))

    def _write_device(self, base: Path, sectors, dev: Optional[str], udev: Optional[Dict[str, str]]):
        base.mkdir(parents=True, exist_ok=True)
        if sectors is not None:
            (base / "size").write_text(f"{sectors}\n")
        if dev is not None:
            (base / "dev").write_text(f"{dev}\n")
            if udev is not None:
                self.add_udev_record(dev, udev)

    def add_udev_record(self, dev: str, props: Dict[str, str]) -> None:
        lines = ["S:disk/by-id/fake", "I:1234567"]
        lines += [f"E:{key}={value}" for key, value in props.items()]
        lines.append("G:systemd")
        (self.udev_data / f"b{dev}").write_text("\n".join(lines) + "\n")

    def add_disk(self, name: str, sectors=0, dev: Optional[str] = None,
                 udev: Optional[Dict[str, str]] = None) -> Path:
        base = self.sys_block / name
        self._write_device(base, sectors, dev, udev)
        (base / "holders").mkdir(exist_ok=True)
        return base

    def add_partition(self, disk: str, name: str, sectors=0, dev: Optional[str] = None,
                      udev: Optional[Dict[str, str]] = None) -> Path:
        base = self.sys_block / disk / name
        self._write_device(base, sectors, dev, udev)
        return base

    def add_dm(self, name: str, sectors=0, dm_uuid: Optional[str] = None,
               dev: Optional[str] = None, udev: Optional[Dict[str, str]] = None,
               holders: Iterable[str] = ()) -> Path:
        base = self.add_disk(name, sectors, dev, udev)
        if dm_uuid is not None:
            (base / "dm").mkdir(exist_ok=True)
            (base / "dm" / "uuid").write_text(f"{dm_uuid}\n")
        for holder in holders:
            (base / "holders" / holder).write_text("")
        return base

    def mount(self, device: str, mount_point: str, fs_type: str, options: str = "rw,relatime"):
        with self.mounts_file.open("a") as f:
            f.write(f"{device} {mount_point} {fs_type} {options} 0 0\n")


@pytest.fixture
def host(tmp_path) -> FakeHost:
    """Empty synthetic host rooted in tmp_path."""
    return FakeHost(tmp_path)


@pytest.fixture
def multipath_host(host) -> FakeHost:
    """Host with one plain disk, one multipath disk and an unused loop device.

    sda: sda1 (EFI, mounted), sda2 (ext4 data, udev only)
    dm-0: multipath map with partition dm-1 and an unrelated map dm-2 stacked on it
    """
    host.add_disk("sda", sectors=1953525168, dev="8:0",
                  udev={"ID_PART_TABLE_UUID": "b0e5d6f0-7c1e-4c2b-9a55-5f3a2b8c9d10"})
    host.add_partition("sda", "sda1", sectors=1048576, dev="8:1", udev={
        "ID_FS_TYPE": "vfat",
        "ID_FS_LABEL": "COS_GRUB",
        "ID_PART_ENTRY_UUID": "2a8f4b7e-0001-4d6f-8a3c-1b2c3d4e5f60",
    })
    host.add_partition("sda", "sda2", sectors=41943040, dev="8:2", udev={
        "ID_FS_TYPE": "ext4",
        "ID_FS_LABEL": "COS_PERSISTENT",
        "ID_PART_ENTRY_UUID": "2a8f4b7e-0002-4d6f-8a3c-1b2c3d4e5f60",
    })
    host.mount("/dev/sda1", "/boot/efi", "vfat")

    host.add_dm("dm-0", sectors=20971520, dm_uuid="mpath-3600508b400105e210000900000490000",
                dev="253:0", udev={"ID_PART_TABLE_UUID": "c4a0f1d2-0000-4000-8000-000000000000"},
                holders=["dm-1", "dm-2"])
    host.add_dm("dm-1", sectors=4194304, dm_uuid="part1-mpath-3600508b400105e210000900000490000",
                dev="253:1", udev={
                    "ID_FS_TYPE": "ext4",
                    "ID_FS_LABEL": "COS_OEM",
                    "ID_PART_ENTRY_UUID": "7d3e9c1a-0001-4b2a-9c8d-aabbccddeeff",
                })
    host.add_dm("dm-2", sectors=2097152, dm_uuid="LVM-k1pY3vDqWb7sXo9Zr2Fh", dev="253:2", udev={})

    host.add_disk("loop0", sectors=0)
    host.mount("/dev/dm-1", "/oem", "ext4")
    return host
