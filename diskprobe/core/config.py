"""diskprobe runtime configuration and settings."""
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from diskprobe.discovery.paths import Paths

OUTPUT_FORMATS = ("table", "json", "yaml")

# Default config search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./diskprobe.yml",
    str(Path.home() / ".config" / "diskprobe" / "diskprobe.yml"),
    "/etc/diskprobe/diskprobe.yml",
]


class ConfigValidationError(Exception):
    """Raised when a config file cannot be used."""


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class DiskProbeConfig:
    """Runtime configuration for a discovery run.

    Attributes:
        root: Prefix prepended to /sys/block, /run/udev/data and /proc/mounts
        verbose: Enable debug logging
        log_file: Also write logs to this file
        output_format: table, json or yaml
    """

    root: str = ""
    verbose: bool = False
    log_file: Optional[str] = None
    output_format: str = "table"

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Unknown output format '{self.output_format}' "
                f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
            )

    @classmethod
    def from_env(cls) -> "DiskProbeConfig":
        """Create config from environment variables.

        Environment variables:
            DISKPROBE_ROOT: Path prefix for the scanned roots
            DISKPROBE_VERBOSE: Enable debug logging (1/true/yes)
            DISKPROBE_LOG_FILE: Log file path
            DISKPROBE_FORMAT: Output format

        Returns:
            DiskProbeConfig instance with values from environment or defaults
        """
        return cls(
            root=os.getenv("DISKPROBE_ROOT", cls.root),
            verbose=_as_bool(os.getenv("DISKPROBE_VERBOSE", cls.verbose)),
            log_file=os.getenv("DISKPROBE_LOG_FILE", cls.log_file),
            output_format=os.getenv("DISKPROBE_FORMAT", cls.output_format),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "DiskProbeConfig":
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: the file does not exist
            ConfigValidationError: the file is not a mapping of known keys
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}") from e

        # Handle empty config file
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigValidationError(f"{path}: expected a mapping at top level")
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiskProbeConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(f"Unknown config keys: {', '.join(unknown)}")

        values = dict(data)
        if "verbose" in values:
            values["verbose"] = _as_bool(values["verbose"])
        if values.get("root") is None:
            values.pop("root", None)
        else:
            values["root"] = str(values["root"])
        return cls(**values)

    def paths(self) -> Paths:
        """Resolve the scan roots; DISKPROBE_CHROOT still wins over ``root``."""
        return Paths.from_env(prefix=self.root)


def find_config(config_path: Optional[str] = None) -> Optional[str]:
    """Locate the active config file, or None when there is none."""
    if config_path:
        return config_path

    if env_config := os.environ.get("DISKPROBE_CONFIG"):
        return env_config

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return path

    return None


def load_config(config_path: Optional[str] = None) -> DiskProbeConfig:
    """Load the config file if one is found, else fall back to the environment."""
    path = find_config(config_path)
    if path is None:
        return DiskProbeConfig.from_env()
    return DiskProbeConfig.from_file(path)
