"""Launch orchestration."""

from .arguments import ArgumentTemplater
from .game_launcher import GameLauncher

__all__ = ["ArgumentTemplater", "GameLauncher"]
