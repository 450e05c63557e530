"""Logging setup."""

import logging
from pathlib import Path
from typing import Optional

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.INFO):
    """Log everything to ``launcher.log`` and ``level`` and above to the console."""
    log_dir = log_dir or (Path.home() / ".cache" / "hzlauncher")
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        if getattr(handler, "_hzlauncher", False):
            logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_dir / "launcher.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    for handler in (file_handler, console_handler):
        handler._hzlauncher = True
        logger.addHandler(handler)

    # aiohttp access/client chatter is not useful in launcher.log
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
