"""Data models for Minecraft versions."""

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Discriminator, Tag, ValidationError

from ..exceptions import ParseError


class Latest(BaseModel):
    release: str
    snapshot: str


class VersionSummary(BaseModel):
    id: str
    type: str
    url: str
    time: Optional[datetime] = None
    releaseTime: datetime
    sha1: Optional[str] = None
    complianceLevel: int = 0


class VersionManifest(BaseModel):
    latest: Latest
    versions: List[VersionSummary]

    @property
    def latest_release(self) -> str:
        return self.latest.release

    @property
    def latest_snapshot(self) -> str:
        return self.latest.snapshot

    def find(self, version_id: str) -> Optional[VersionSummary]:
        """Get the summary of a version by id."""
        for version in self.versions:
            if version.id == version_id:
                return version
        return None


RuleAction = Literal["allow", "deny", "disallow"]


class OsPredicate(BaseModel):
    name: Optional[str] = None
    arch: Optional[str] = None
    version: Optional[str] = None


class OsRule(BaseModel):
    action: RuleAction
    os: OsPredicate


class FeatureRule(BaseModel):
    action: RuleAction
    features: Dict[str, bool]


def _rule_kind(value) -> Optional[str]:
    # os wins when a rule carries both predicates
    if isinstance(value, dict):
        if "os" in value:
            return "os"
        if "features" in value:
            return "features"
        return None
    if isinstance(value, OsRule):
        return "os"
    if isinstance(value, FeatureRule):
        return "features"
    return None


Rule = Annotated[
    Union[Annotated[OsRule, Tag("os")], Annotated[FeatureRule, Tag("features")]],
    Discriminator(_rule_kind),
]


class ConditionalArgument(BaseModel):
    rules: List[Rule]
    value: Union[str, List[str]]


Argument = Union[str, List[str], ConditionalArgument]


class Arguments(BaseModel):
    jvm: List[Argument] = []
    game: List[Argument] = []


class LibraryArtifact(BaseModel):
    path: str
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None


class LibraryDownloads(BaseModel):
    artifact: LibraryArtifact


class Library(BaseModel):
    name: Optional[str] = None
    downloads: LibraryDownloads
    rules: Optional[List[Rule]] = None


class DownloadInfo(BaseModel):
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None


class VersionDownloads(BaseModel):
    client: DownloadInfo
    server: Optional[DownloadInfo] = None


class AssetIndexRef(BaseModel):
    id: str
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None
    totalSize: Optional[int] = None


class VersionDetail(BaseModel):
    """Parsed version.json data"""
    id: str
    type: str
    mainClass: str
    downloads: VersionDownloads
    assetIndex: AssetIndexRef
    libraries: List[Library] = []
    arguments: Arguments


class AssetObject(BaseModel):
    hash: str
    size: int = 0

    @property
    def sub_path(self) -> str:
        """Sharded location of the object, relative to the objects root."""
        return f"{self.hash[:2]}/{self.hash}"


class AssetIndex(BaseModel):
    objects: Dict[str, AssetObject]


Document = TypeVar("Document", bound=BaseModel)


def parse_document(model: Type[Document], data: Union[str, bytes], source: object) -> Document:
    """Validate raw JSON into ``model``, reporting failures as ParseError."""
    try:
        return model.model_validate_json(data)
    except ValidationError as e:
        raise ParseError(source, e) from e
