"""Block storage discovery engine."""
from diskprobe.discovery.errors import AccessError, DiscoveryError, ParseError
from diskprobe.discovery.handlers import PartitionHandler
from diskprobe.discovery.paths import Paths
from diskprobe.discovery.scanner import BlockDiscovery, get_disks

__all__ = [
    'AccessError',
    'BlockDiscovery',
    'DiscoveryError',
    'ParseError',
    'PartitionHandler',
    'Paths',
    'get_disks',
]
