#!/usr/bin/env python3
"""diskprobe CLI - point-in-time block storage discovery for Linux hosts."""

import typer
from rich.console import Console

from diskprobe.cli_scan_commands import register_scan_commands

app = typer.Typer(
    name="diskprobe",
    help="""diskprobe - Block storage discovery for Linux hosts

Reads /sys/block, the udev database and /proc/mounts. Never writes.

Quick start:
  diskprobe disks                      # Disks and sizes
  diskprobe partitions                 # Partitions, labels, UUIDs, mounts
  diskprobe scan --format json         # Full snapshot
  diskprobe scan --root /mnt/capture   # Scan a captured filesystem
""",
    add_completion=False,
)

console = Console()

register_scan_commands(app, console)


def main():
    app()


if __name__ == "__main__":
    main()
