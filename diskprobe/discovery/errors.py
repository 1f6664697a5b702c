"""Error kinds raised by the low-level readers.

Callers inside the discovery engine catch these, log them and fall back to a
default value, so none of them escapes a scan.
"""
from typing import Optional


class DiscoveryError(Exception):
    """Base class for read failures during a scan."""

    def __init__(self, path: str, message: str):
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")


class AccessError(DiscoveryError):
    """A path is missing or unreadable."""

    def __init__(self, path: str, cause: Optional[OSError] = None):
        self.cause = cause
        reason = cause.strerror if cause is not None and cause.strerror else "cannot read"
        super().__init__(path, reason)


class ParseError(DiscoveryError):
    """Content was read but is not in the expected form."""

    def __init__(self, path: str, content: str, expected: str):
        self.content = content
        self.expected = expected
        super().__init__(path, f"expected {expected}, got {content!r}")
