"""Scan CLI commands - disks, partitions, scan."""
from typing import List, Optional

import typer
from rich.console import Console

from diskprobe.cli_support import (
    disks_table,
    partitions_table,
    print_error,
    print_success,
    render_partitions,
    render_snapshot,
    resolve_config,
)
from diskprobe.core.config import DiskProbeConfig
from diskprobe.core.logger import get_logger
from diskprobe.discovery import get_disks
from diskprobe.models.disk import Disk, all_partitions

# Module-level console instance (will be set by register function)
console: Console = Console()

scan_logger = get_logger("diskprobe.discovery")


def _discover(config: DiskProbeConfig) -> List[Disk]:
    return get_disks(config.paths(), scan_logger)


def disks(
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Path prefix for /sys, /run and /proc (captured snapshot or chroot)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to diskprobe.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: table, json or yaml"),
):
    """List the disks found in /sys/block."""
    settings = resolve_config(console, config, root, verbose, log_file, output_format)
    found = _discover(settings)
    if not found:
        print_error(console, "No disks found")
        raise typer.Exit(1)

    if settings.output_format != "table":
        typer.echo(render_snapshot(found, settings.output_format))
        return

    print_success(console, f"Discovered {len(found)} disk(s)")
    console.print(disks_table(found))


def partitions(
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Path prefix for /sys, /run and /proc (captured snapshot or chroot)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to diskprobe.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: table, json or yaml"),
):
    """List the partitions of every disk."""
    settings = resolve_config(console, config, root, verbose, log_file, output_format)
    found = all_partitions(_discover(settings))
    if not found:
        print_error(console, "No partitions found")
        raise typer.Exit(1)

    if settings.output_format != "table":
        typer.echo(render_partitions(found, settings.output_format))
        return

    print_success(console, f"Found {len(found)} partition(s)")
    console.print(partitions_table(found))


def scan(
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Path prefix for /sys, /run and /proc (captured snapshot or chroot)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to diskprobe.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: table, json or yaml"),
):
    """Full snapshot: disks, then partitions.

    Examples:
        diskprobe scan                      # Scan the live host
        diskprobe scan --root /mnt/sysroot  # Scan a captured snapshot
        diskprobe scan --format json        # Machine-readable output
    """
    settings = resolve_config(console, config, root, verbose, log_file, output_format)
    found = _discover(settings)
    if not found:
        print_error(console, "No disks found")
        raise typer.Exit(1)

    if settings.output_format != "table":
        typer.echo(render_snapshot(found, settings.output_format))
        return

    parts = all_partitions(found)
    console.print(disks_table(found))
    if parts:
        console.print(partitions_table(parts))
    print_success(console, f"Discovered {len(found)} disk(s) and {len(parts)} partition(s)")


def register_scan_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register scan commands with the main Typer app."""
    global console
    console = shared_console

    app.command()(disks)
    app.command()(partitions)
    app.command()(scan)
