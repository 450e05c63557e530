"""Version manifest and metadata manager."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiofiles

from ..config import LauncherConfig
from ..exceptions import FilesystemError, ParseError, VersionNotFoundError
from .download_manager import DownloadManager
from .models import (AssetIndex, AssetIndexRef, VersionDetail, VersionManifest,
                     VersionSummary, parse_document)

log = logging.getLogger(__name__)


class VersionManager:
    """
    Read-through file cache for the version manifest, version details and
    asset indexes. A cache file, once written, is trusted for its id until
    it is deleted.
    """

    def __init__(self, config: LauncherConfig, downloads: DownloadManager):
        self.config = config
        self.downloads = downloads
        self.manifest: Optional[VersionManifest] = None
        self._manifest_lock = asyncio.Lock()

    @staticmethod
    async def _read_cached(path: Path) -> Optional[bytes]:
        """Read a cache file, or None when it does not exist yet."""
        try:
            async with aiofiles.open(path, 'rb') as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise FilesystemError(path, e) from e

    async def _store(self, path: Path, data: bytes):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, 'wb') as f:
                await f.write(data)
        except OSError as e:
            raise FilesystemError(path, e) from e

    async def load_manifest(self) -> VersionManifest:
        """Load the version manifest from disk, fetching it on first use."""
        async with self._manifest_lock:
            path = self.config.manifest_file
            data = await self._read_cached(path)
            manifest = None
            if data is not None:
                try:
                    manifest = parse_document(VersionManifest, data, path)
                except ParseError as e:
                    log.warning(f"Ignoring unreadable manifest cache: {e}")

            if manifest is None:
                log.info("Fetching version manifest")
                data = await self.downloads.download_one(self.config.manifest_url)
                manifest = parse_document(VersionManifest, data, self.config.manifest_url)
                await self._store(path, data)

            self.manifest = manifest
            return manifest

    async def get_manifest(self) -> VersionManifest:
        """Get the loaded manifest, loading it if needed."""
        if self.manifest is not None:
            return self.manifest
        return await self.load_manifest()

    async def get_version_info(self, version_id: str) -> VersionSummary:
        """Get the manifest entry for a specific version."""
        manifest = await self.get_manifest()
        summary = manifest.find(version_id)
        if summary is None:
            raise VersionNotFoundError(f"Unknown version: {version_id}")
        return summary

    async def get_version_detail(self, version_id: str) -> VersionDetail:
        """Fetch and parse version.json for a specific version."""
        path = self.config.version_file(version_id)
        data = await self._read_cached(path)
        if data is not None:
            return parse_document(VersionDetail, data, path)

        summary = await self.get_version_info(version_id)
        log.info(f"Fetching metadata for version {version_id}")
        data = await self.downloads.download_one(summary.url)
        detail = parse_document(VersionDetail, data, summary.url)
        await self._store(path, data)
        return detail

    async def get_asset_index(self, ref: AssetIndexRef) -> AssetIndex:
        """Fetch and parse the asset index referenced by a version."""
        path = self.config.asset_index_file(ref.id)
        data = await self._read_cached(path)
        if data is not None:
            return parse_document(AssetIndex, data, path)

        log.info(f"Fetching asset index {ref.id}")
        data = await self.downloads.download_one(ref.url)
        index = parse_document(AssetIndex, data, ref.url)
        await self._store(path, data)
        return index
