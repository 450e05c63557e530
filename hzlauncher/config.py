"""Launcher configuration."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class LauncherConfig(BaseModel):
    """Paths, endpoints and limits used by the launcher core."""

    data_dir: Path = Path("data")
    manifest_url: str = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
    resources_url: str = "https://resources.download.minecraft.net"
    parallel_downloads: int = Field(default=8, ge=1)
    request_timeout: float = Field(default=60.0, gt=0)
    launch_timeout: Optional[float] = Field(default=None, gt=0)
    java_executable: str = "java"
    launcher_name: str = "HZLauncher"
    launcher_version: str = "1.0"
    user_type: str = "mojang"

    @classmethod
    def load(cls, **values: Any) -> "LauncherConfig":
        """Build a config, reporting invalid values as ConfigurationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @property
    def manifest_file(self) -> Path:
        return self.data_dir / "versions.json"

    @property
    def versions_dir(self) -> Path:
        return self.data_dir / "versions"

    @property
    def libraries_dir(self) -> Path:
        return self.data_dir / "libraries"

    @property
    def clients_dir(self) -> Path:
        return self.data_dir / "clients"

    @property
    def natives_dir(self) -> Path:
        return self.data_dir / "natives"

    @property
    def instance_dir(self) -> Path:
        return self.data_dir / "instance"

    @property
    def assets_dir(self) -> Path:
        return self.data_dir / "assets"

    @property
    def objects_dir(self) -> Path:
        return self.assets_dir / "objects"

    @property
    def indexes_dir(self) -> Path:
        return self.assets_dir / "indexes"

    @property
    def legacy_dir(self) -> Path:
        return self.assets_dir / "virtual" / "legacy"

    def version_file(self, version_id: str) -> Path:
        return self.versions_dir / f"{version_id}.json"

    def client_file(self, version_id: str) -> Path:
        return self.clients_dir / f"{version_id}.jar"

    def asset_index_file(self, index_id: str) -> Path:
        return self.indexes_dir / f"{index_id}.json"
