"""Shared utilities for diskprobe CLI modules."""
from __future__ import annotations

import json
from dataclasses import replace
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from diskprobe.core.config import ConfigValidationError, DiskProbeConfig, load_config
from diskprobe.core.logger import set_verbosity, setup_file_logging
from diskprobe.models.disk import Disk, Partition

GIB = 1024 * 1024 * 1024


def resolve_config(
    console: Console,
    config_path: Optional[str] = None,
    root: Optional[str] = None,
    verbose: bool = False,
    log_file: Optional[str] = None,
    output_format: Optional[str] = None,
) -> DiskProbeConfig:
    """Load the config file/environment and apply command line overrides."""
    try:
        config = load_config(config_path)
        if root is not None:
            config.root = root
        if verbose:
            config.verbose = True
        if log_file:
            config.log_file = log_file
        if output_format:
            config = replace(config, output_format=output_format)
    except (FileNotFoundError, ConfigValidationError) as e:
        handle_cli_error(e, console, verbose=verbose)

    set_verbosity(config.verbose)
    if config.log_file:
        setup_file_logging(log_file=config.log_file, verbose=config.verbose)
    return config


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {e}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    console.print(f"[red]{prefix}[/red] {message}")


def disks_table(disks: List[Disk]) -> Table:
    """Build the disk overview table."""
    table = Table(title="📀 Disks", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Size", style="blue")
    table.add_column("Bytes", style="blue")
    table.add_column("UUID")
    table.add_column("Partitions", style="green")

    for index, disk in enumerate(disks, start=1):
        table.add_row(
            str(index),
            disk.name,
            f"{disk.size_bytes / GIB:.2f} GB",
            str(disk.size_bytes),
            disk.uuid,
            str(len(disk.partitions)),
        )
    return table


def partitions_table(partitions: List[Partition]) -> Table:
    """Build the partition detail table."""
    table = Table(title="💾 Partitions", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Disk")
    table.add_column("Size (MiB)", style="blue")
    table.add_column("FS")
    table.add_column("Label", style="bold")
    table.add_column("UUID")
    table.add_column("Mount Point", style="green")

    for part in partitions:
        table.add_row(
            part.name,
            part.disk,
            str(part.size),
            part.fs,
            part.filesystem_label,
            part.uuid,
            part.mount_point or "[dim]-[/dim]",
        )
    return table


def render_snapshot(disks: List[Disk], output_format: str) -> str:
    """Serialize disks for json/yaml output."""
    return _render({"disks": [disk.to_dict() for disk in disks]}, output_format)


def render_partitions(partitions: List[Partition], output_format: str) -> str:
    return _render({"partitions": [part.to_dict() for part in partitions]}, output_format)


def _render(data: dict, output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    return json.dumps(data, indent=2)
