"""Root paths consumed by the discovery engine."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

CHROOT_ENV = "DISKPROBE_CHROOT"

SYS_BLOCK = "/sys/block/"
RUN_UDEV_DATA = "/run/udev/data"
PROC_MOUNTS = "/proc/mounts"


@dataclass(frozen=True)
class Paths:
    """Locations of the block-device tree, udev database and mount table.

    Every root can be relocated under a prefix so a scan can run against a
    captured snapshot or a chroot instead of the live host.
    """

    sys_block: str = SYS_BLOCK
    run_udev_data: str = RUN_UDEV_DATA
    proc_mounts: str = PROC_MOUNTS

    @classmethod
    def with_prefix(cls, prefix: str = "", override: Optional[str] = None) -> "Paths":
        """Build paths rooted at ``override`` if given, else at ``prefix``."""
        root = override if override is not None else prefix
        root = (root or "").rstrip("/")
        if not root:
            return cls()
        return cls(
            sys_block=f"{root}{SYS_BLOCK}",
            run_udev_data=f"{root}{RUN_UDEV_DATA}",
            proc_mounts=f"{root}{PROC_MOUNTS}",
        )

    @classmethod
    def from_env(cls, prefix: str = "", environ: Optional[Mapping[str, str]] = None) -> "Paths":
        """Build paths honouring the DISKPROBE_CHROOT override.

        The environment value takes precedence over ``prefix``.
        """
        env = os.environ if environ is None else environ
        return cls.with_prefix(prefix, override=env.get(CHROOT_ENV))
