"""Launch argument templating."""

import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from ..auth.account import Account
from ..config import LauncherConfig
from ..exceptions import MissingAccountError
from ..versions.models import Argument, ConditionalArgument, VersionDetail
from ..versions.rules import HostInfo, check_rules

PLACEHOLDER_SENTINEL = "$"

PLACEHOLDERS = (
    "auth_player_name",
    "version_name",
    "game_directory",
    "assets_root",
    "assets_index_name",
    "auth_uuid",
    "auth_access_token",
    "user_type",
    "version_type",
    "natives_directory",
    "launcher_name",
    "launcher_version",
    "classpath",
)

_PLACEHOLDER_RE = re.compile("|".join(re.escape("${%s}" % name) for name in PLACEHOLDERS))


class ArgumentTemplater:
    """Substitutes the known ``${...}`` placeholders in a single pass."""

    def __init__(self, values: Dict[str, str]):
        missing = set(PLACEHOLDERS) - set(values)
        if missing:
            raise ValueError(f"Missing placeholder values: {sorted(missing)}")
        self._values = {"${%s}" % name: str(values[name]) for name in PLACEHOLDERS}

    @classmethod
    def for_launch(cls, account: Optional[Account], detail: VersionDetail,
                   config: LauncherConfig, classpath: str) -> "ArgumentTemplater":
        """Build the substitution table for launching ``detail`` as ``account``."""
        if account is None:
            raise MissingAccountError("An account must be set before launching")

        return cls({
            "auth_player_name": account.name,
            "version_name": detail.id,
            "game_directory": _absolute(config.instance_dir),
            "assets_root": _absolute(config.assets_dir),
            "assets_index_name": detail.assetIndex.id,
            "auth_uuid": account.id,
            "auth_access_token": account.mc_creds.access_token,
            "user_type": config.user_type,
            "version_type": detail.type,
            "natives_directory": _absolute(config.natives_dir),
            "launcher_name": config.launcher_name,
            "launcher_version": config.launcher_version,
            "classpath": classpath,
        })

    def render(self, argument: str) -> str:
        """Substitute placeholders; an argument left unresolved renders as ''."""
        result = _PLACEHOLDER_RE.sub(lambda m: self._values[m.group(0)], argument)
        if result.startswith(PLACEHOLDER_SENTINEL):
            return ""
        return result


def _absolute(path: Path) -> str:
    return str(path.resolve())


def expand_arguments(arguments: Sequence[Argument], host: HostInfo) -> Iterator[str]:
    """Yield the raw argument templates that apply on ``host``, in order."""
    for argument in arguments:
        if isinstance(argument, ConditionalArgument):
            if not check_rules(argument.rules, host):
                continue
            value = argument.value
        else:
            value = argument

        if isinstance(value, str):
            yield value
        else:
            yield from value


def render_arguments(arguments: Sequence[Argument], host: HostInfo,
                     templater: ArgumentTemplater) -> List[str]:
    return [templater.render(argument) for argument in expand_arguments(arguments, host)]
