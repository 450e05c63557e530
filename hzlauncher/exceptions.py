"""
Exceptions raised by the launcher core. Every error surfaced to a caller
derives from LauncherError.
"""


class LauncherError(Exception):
    """Base exception for all launcher errors."""


class ConfigurationError(LauncherError):
    """Raised when launcher configuration values are invalid."""


class NetworkError(LauncherError):
    """Raised for any transport or HTTP status failure."""

    def __init__(self, url: str, reason: object):
        super().__init__(f"Network error fetching {url}: {reason}")
        self.url = url
        self.reason = reason


class FilesystemError(LauncherError):
    """Raised for I/O failures other than a missing cache file."""

    def __init__(self, path: object, reason: object):
        super().__init__(f"Filesystem error at {path}: {reason}")
        self.path = path
        self.reason = reason


class ParseError(LauncherError):
    """Raised when a manifest, version or asset index document is malformed."""

    def __init__(self, source: object, reason: object):
        super().__init__(f"Malformed document {source}: {reason}")
        self.source = source
        self.reason = reason


class VersionNotFoundError(LauncherError):
    """Raised when a version id is not listed in the manifest."""


class MissingAccountError(LauncherError):
    """Raised when launching without an account set."""


class LaunchError(LauncherError):
    """Raised when the game runtime cannot be started."""
