"""Logging for diskprobe: Rich console on stderr, optional log file.

The discovery engine takes a logger as a parameter. These helpers only build
the loggers the CLI hands to it.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# stdout carries the JSON/YAML snapshot
console = Console(stderr=True)

LOG_FILE = Path("/var/log/diskprobe/diskprobe.log")
FALLBACK_LOG_FILE = Path("/tmp/diskprobe.log")

_file_logging_configured = False


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False):
    """Mirror every ``diskprobe.*`` record into a log file.

    Scans are often run from installer environments where /var/log is
    read-only, in which case records go to /tmp/diskprobe.log. Only the first
    call per process has an effect.
    """
    global _file_logging_configured

    if _file_logging_configured:
        return

    target = Path(log_file) if log_file else LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target = FALLBACK_LOG_FILE

    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.FileHandler(target)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    package_logger = logging.getLogger("diskprobe")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    _file_logging_configured = True
    package_logger.info(f"diskprobe logging initialized: {target}")


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` with one RichHandler attached.

    ``level`` applies only the first time; use set_verbosity to change it.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def set_verbosity(verbose: bool) -> None:
    """Switch every diskprobe logger between DEBUG and INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("diskprobe").setLevel(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("diskprobe.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
