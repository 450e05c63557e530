"""HZLauncher core: install and launch Minecraft versions."""

__version__ = "0.1.0"
