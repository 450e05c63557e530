"""Version management module."""

from .manager import VersionManager
from .download_manager import DownloadManager, DownloadQueue, DownloadResult
from .models import AssetIndex, VersionDetail, VersionManifest, VersionSummary
from .rules import HostInfo, check_rules

__all__ = [
    "VersionManager", "DownloadManager", "DownloadQueue", "DownloadResult",
    "AssetIndex", "VersionDetail", "VersionManifest", "VersionSummary",
    "HostInfo", "check_rules",
]
