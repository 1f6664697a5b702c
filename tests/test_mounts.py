"""Tests for the mount table reader."""
from diskprobe.discovery.mounts import MountTable, decode_mount_point, parse_mount_line

MOUNTS = r"""sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0
proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0
/dev/sda2 / ext4 rw,relatime,errors=remount-ro 0 0
/dev/sda1 /boot/efi vfat rw,relatime,fmask=0077 0 0
/dev/sdb1 /media/My\040Disk ntfs3 ro 0 0
tmpfs /run tmpfs rw,nosuid,nodev,mode=755 0 0
/dev/broken
"""


def test_parse_mount_line():
    entry = parse_mount_line("/dev/sda2 / ext4 rw,relatime,errors=remount-ro 0 0")
    assert entry.device == "/dev/sda2"
    assert entry.mount_point == "/"
    assert entry.fs_type == "ext4"
    assert entry.options == ["rw", "relatime", "errors=remount-ro"]


def test_parse_mount_line_skips_pseudo_and_short_lines():
    assert parse_mount_line("proc /proc proc rw 0 0") is None
    assert parse_mount_line("/dev/sda1 /boot") is None
    assert parse_mount_line("") is None


def test_decode_mount_point():
    assert decode_mount_point(r"/media/My\040Disk") == "/media/My Disk"
    assert decode_mount_point(r"/a\011b") == "/a\tb"
    assert decode_mount_point(r"/a\012b") == "/a\nb"
    assert decode_mount_point(r"/a\134b") == "/a\\b"
    assert decode_mount_point(r"/a\\b") == "/a\\b"
    assert decode_mount_point("/plain") == "/plain"


def test_lookup(host):
    host.mounts_file.write_text(MOUNTS)
    table = MountTable(host.paths)
    assert table.lookup("sda2") == ("/", "ext4")
    assert table.lookup("/dev/sda1") == ("/boot/efi", "vfat")
    assert table.lookup("sdb1") == ("/media/My Disk", "ntfs3")
    assert table.lookup("sdc1") == ("", "")


def test_lookup_first_entry_wins(host):
    host.mount("/dev/sda2", "/", "ext4")
    host.mount("/dev/sda2", "/mnt/bind", "ext4")
    assert MountTable(host.paths).lookup("sda2") == ("/", "ext4")


def test_missing_mount_table(host):
    host.mounts_file.unlink()
    table = MountTable(host.paths)
    assert table.entries == []
    assert table.lookup("sda1") == ("", "")


def test_table_read_once(host):
    host.mount("/dev/sda1", "/boot", "vfat")
    table = MountTable(host.paths)
    assert table.lookup("sda1") == ("/boot", "vfat")
    host.mounts_file.write_text("")
    assert table.lookup("sda1") == ("/boot", "vfat")


def test_latin1_mount_point_does_not_break_table(host):
    host.mount("/dev/sda1", "/boot", "vfat")
    with host.mounts_file.open("ab") as f:
        f.write(b"/dev/sdc1 /mnt/caf\xe9 ext4 rw 0 0\n")
    host.mount("/dev/sda2", "/", "ext4")

    table = MountTable(host.paths)
    assert table.lookup("sdc1") == ("/mnt/caf\ufffd", "ext4")
    assert table.lookup("sda1") == ("/boot", "vfat")
    assert table.lookup("sda2") == ("/", "ext4")
