"""Shared fixtures: metadata documents and an in-memory download manager."""

import asyncio
import json
from datetime import datetime, timedelta, timezone

import aiohttp
import pytest

from hzlauncher.auth.account import Account, McCredentials, MsCredentials
from hzlauncher.versions.download_manager import DownloadManager
from hzlauncher.versions.rules import HostInfo

MANIFEST_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
DETAIL_URL = "https://piston-meta.mojang.com/v1/packages/1.20.1.json"
INDEX_URL = "https://piston-meta.mojang.com/v1/packages/5.json"
CLIENT_URL = "https://piston-data.mojang.com/v1/objects/client.jar"
LIBRARY_URL = "https://libraries.minecraft.net/com/example/a/1/a-1.jar"
WINDOWS_LIBRARY_URL = "https://libraries.minecraft.net/com/example/win/1/win-1.jar"
ASSET_HASH = "abcdef0123456789abcdef0123456789abcdef01"
ASSET_URL = f"https://resources.download.minecraft.net/ab/{ASSET_HASH}"
ASSET_PATH = "minecraft/sounds/ambient/cave/cave1.ogg"


def manifest_document():
    return {
        "latest": {"release": "1.20.1", "snapshot": "23w31a"},
        "versions": [
            {
                "id": "1.20.1",
                "type": "release",
                "url": DETAIL_URL,
                "time": "2023-06-12T13:25:51+00:00",
                "releaseTime": "2023-06-12T13:25:51+00:00",
                "sha1": "0c13d8b2a6bd7d2b8bc1f9b4c8e8e8d6a7b2f2a1",
                "complianceLevel": 1,
            },
            {
                "id": "23w31a",
                "type": "snapshot",
                "url": "https://piston-meta.mojang.com/v1/packages/23w31a.json",
                "time": "2023-08-01T11:03:31+00:00",
                "releaseTime": "2023-08-01T11:03:31+00:00",
                "complianceLevel": 1,
            },
        ],
    }


def detail_document():
    return {
        "id": "1.20.1",
        "type": "release",
        "mainClass": "net.minecraft.client.main.Main",
        "downloads": {"client": {"url": CLIENT_URL, "size": 23028853}},
        "assetIndex": {"id": "5", "url": INDEX_URL, "totalSize": 4},
        "libraries": [
            {
                "name": "com.example:a:1",
                "downloads": {"artifact": {"path": "com/example/a/1/a-1.jar", "url": LIBRARY_URL}},
            },
            {
                "name": "com.example:win:1",
                "downloads": {"artifact": {"path": "com/example/win/1/win-1.jar", "url": WINDOWS_LIBRARY_URL}},
                "rules": [{"action": "allow", "os": {"name": "windows"}}],
            },
        ],
        "arguments": {
            "jvm": [
                {"rules": [{"action": "allow", "os": {"name": "osx"}}], "value": ["-XstartOnFirstThread"]},
                "-Djava.library.path=${natives_directory}",
                "-Dminecraft.launcher.brand=${launcher_name}",
                "-Dminecraft.launcher.version=${launcher_version}",
                "-cp",
                "${classpath}",
            ],
            "game": [
                "--username", "${auth_player_name}",
                "--version", "${version_name}",
                "--gameDir", "${game_directory}",
                "--assetsDir", "${assets_root}",
                "--assetIndex", "${assets_index_name}",
                "--uuid", "${auth_uuid}",
                "--accessToken", "${auth_access_token}",
                "--clientId", "${clientid}",
                "--userType", "${user_type}",
                "--versionType", "${version_type}",
                {
                    "rules": [{"action": "allow", "features": {"has_custom_resolution": True}}],
                    "value": ["--width", "${resolution_width}"],
                },
            ],
        },
    }


def asset_index_document():
    return {"objects": {ASSET_PATH: {"hash": ASSET_HASH, "size": 4}}}


def encode(document) -> bytes:
    return json.dumps(document).encode()


class FakeDownloadManager(DownloadManager):
    """Serves canned responses and records every requested URL."""

    def __init__(self, responses, delay: float = 0.0):
        super().__init__(concurrent_downloads=8)
        self.responses = dict(responses)
        self.delay = delay
        self.requests = []
        self.queues = []

    def queue(self):
        queue = super().queue()
        self.queues.append(queue)
        return queue

    async def _get(self, url: str) -> bytes:
        self.requests.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if url not in self.responses:
            raise aiohttp.ClientConnectionError(f"cannot reach {url}")
        return self.responses[url]


@pytest.fixture
def responses():
    return {
        MANIFEST_URL: encode(manifest_document()),
        DETAIL_URL: encode(detail_document()),
        INDEX_URL: encode(asset_index_document()),
        CLIENT_URL: b"client-jar",
        LIBRARY_URL: b"library-a",
        WINDOWS_LIBRARY_URL: b"library-win",
        ASSET_URL: b"ogg!",
    }


@pytest.fixture
def downloads(responses):
    return FakeDownloadManager(responses)


@pytest.fixture
def linux_host():
    return HostInfo(os_name="linux", arch="x86_64", unix=True)


@pytest.fixture
def account():
    expires = datetime.now(timezone.utc) + timedelta(hours=1)
    return Account(
        name="Steve",
        id="069a79f444e94726a5befca90e38aaf5",
        ms_creds=MsCredentials(
            access_token="ms-token",
            refresh_token="ms-refresh",
            expires_at=expires,
            xbox_token="xbl-token",
            xsts_token="xsts-token",
            user_hash="uhs",
        ),
        mc_creds=McCredentials(access_token="mc-token", expires_at=expires),
    )
