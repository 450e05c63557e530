"""Game launcher for Minecraft."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import aiofiles

from ..auth.account import Account
from ..config import LauncherConfig
from ..exceptions import FilesystemError, LaunchError, MissingAccountError, NetworkError
from ..versions.download_manager import CorrelationId, DownloadManager, DownloadResult
from ..versions.manager import VersionManager
from ..versions.models import AssetIndex, VersionDetail, VersionManifest
from ..versions.rules import HostInfo, check_rules
from .arguments import ArgumentTemplater, render_arguments

log = logging.getLogger(__name__)


class GameLauncher:
    """
    Installs a version into the local data directory and starts it.

    Only the manifest and the account are kept between calls; every queue,
    path table and classpath used while staging a version is local to one
    ``play_version`` call.
    """

    def __init__(self, config: Optional[LauncherConfig] = None,
                 downloads: Optional[DownloadManager] = None,
                 host: Optional[HostInfo] = None):
        self.config = config or LauncherConfig()
        self.downloads = downloads or DownloadManager(self.config.parallel_downloads,
                                                      self.config.request_timeout)
        self.versions = VersionManager(self.config, self.downloads)
        self.host = host or HostInfo.current()
        self.account: Optional[Account] = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.downloads.close()

    async def load_versions(self) -> VersionManifest:
        """Load the version manifest, fetching it if it is not cached yet."""
        return await self.versions.load_manifest()

    async def play_version(self, version_id: str):
        """Install everything ``version_id`` needs, then run it until it exits."""
        if self.account is None:
            raise MissingAccountError("An account must be set before launching")
        if self.account.is_expired():
            log.warning(f"Minecraft token of {self.account.name} has expired")

        prepare = self.prepare_version(version_id)
        if self.config.launch_timeout is not None:
            arguments = await asyncio.wait_for(prepare, self.config.launch_timeout)
        else:
            arguments = await prepare

        await self.launch(arguments)

    async def prepare_version(self, version_id: str) -> List[str]:
        """Stage libraries, client and assets; return the launch arguments."""
        detail = await self.versions.get_version_detail(version_id)

        classpath = await self.install_libraries(detail)
        classpath += await self.install_client(detail)

        self.create_directories()

        asset_index = await self.versions.get_asset_index(detail.assetIndex)
        await self.install_assets(asset_index)

        return self.build_arguments(detail, classpath)

    @staticmethod
    def _check_result(result: DownloadResult, what: Path):
        if not result.ok:
            log.error(f"Failed to download {what}")
            raise NetworkError(result.url, result.error) from result.error

    @staticmethod
    async def _write_file(path: Path, data: bytes):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, 'wb') as f:
                await f.write(data)
        except OSError as e:
            raise FilesystemError(path, e) from e

    async def install_libraries(self, detail: VersionDetail) -> str:
        """
        Download missing libraries allowed on this host.

        Returns the classpath of the allowed libraries, each entry followed by
        the separator. On hosts outside the unix family only the separator is
        emitted for each library.
        """
        libraries_root = self.config.libraries_dir.as_posix()
        queue = self.downloads.queue()
        destinations: Dict[CorrelationId, Path] = {}
        classpath = ""

        for library in detail.libraries:
            if not check_rules(library.rules, self.host):
                log.debug(f"Skipping library {library.name} on this host")
                continue

            artifact = library.downloads.artifact
            classpath += f"{libraries_root}/"
            if self.host.unix:
                classpath += artifact.path + self.host.classpath_separator
            else:
                classpath += self.host.classpath_separator

            path = self.config.libraries_dir / artifact.path
            if path.exists():
                continue
            destinations[queue.add(artifact.url)] = path

        log.info(f"Downloading {len(queue)} libraries")
        for result in await queue.download_all():
            path = destinations[result.key]
            self._check_result(result, path)
            await self._write_file(path, result.data)

        return classpath

    async def install_client(self, detail: VersionDetail) -> str:
        """Download the client jar if missing; return its absolute path."""
        path = self.config.client_file(detail.id)
        if not path.exists():
            log.info(f"Downloading client {detail.id}")
            data = await self.downloads.download_one(detail.downloads.client.url)
            await self._write_file(path, data)
        return str(path.resolve())

    def create_directories(self):
        for directory in (self.config.natives_dir, self.config.instance_dir,
                          self.config.objects_dir, self.config.indexes_dir,
                          self.config.legacy_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FilesystemError(directory, e) from e

    async def install_assets(self, asset_index: AssetIndex):
        """Download assets whose object file or legacy copy is missing."""
        queue = self.downloads.queue()
        queued: Dict[str, CorrelationId] = {}
        destinations: Dict[CorrelationId, Tuple[Path, List[Path]]] = {}

        for virtual_path, asset in asset_index.objects.items():
            object_path = self.config.objects_dir / asset.sub_path
            legacy_path = self.config.legacy_dir / virtual_path
            if object_path.exists() and legacy_path.exists():
                continue

            # objects shared by several virtual paths are fetched once
            key = queued.get(asset.hash)
            if key is None:
                key = queue.add(f"{self.config.resources_url}/{asset.sub_path}")
                queued[asset.hash] = key
                destinations[key] = (object_path, [])
            destinations[key][1].append(legacy_path)

        log.info(f"Downloading {len(queue)} assets")
        for result in await queue.download_all():
            object_path, legacy_paths = destinations[result.key]
            self._check_result(result, object_path)
            await self._write_file(object_path, result.data)
            for legacy_path in legacy_paths:
                try:
                    legacy_path.parent.mkdir(parents=True, exist_ok=True)
                    await asyncio.to_thread(shutil.copyfile, object_path, legacy_path)
                except OSError as e:
                    raise FilesystemError(legacy_path, e) from e

    def build_arguments(self, detail: VersionDetail, classpath: str) -> List[str]:
        """Assemble JVM arguments, main class and game arguments in order."""
        templater = ArgumentTemplater.for_launch(self.account, detail, self.config, classpath)
        arguments = render_arguments(detail.arguments.jvm, self.host, templater)
        arguments.append(detail.mainClass)
        arguments.extend(render_arguments(detail.arguments.game, self.host, templater))
        return arguments

    async def launch(self, arguments: List[str]):
        """Run the game runtime with inherited stdio and wait for it to exit."""
        java = self.config.java_executable
        log.info(f"Starting {java} with {len(arguments)} arguments")
        try:
            process = await asyncio.create_subprocess_exec(java, *arguments)
        except OSError as e:
            raise LaunchError(f"Could not start {java}: {e}") from e

        try:
            returncode = await process.wait()
        except asyncio.CancelledError:
            if process.returncode is None:
                log.info(f"Cancelled, terminating {java}")
                process.terminate()
            raise

        log.info(f"{java} exited with {returncode}")
