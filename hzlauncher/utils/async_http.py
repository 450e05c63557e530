"""Async HTTP session construction."""

import aiohttp
from typing import Optional, Dict

from .. import __version__


DEFAULT_HEADERS = {"User-Agent": f"HZLauncher/{__version__}"}


def create_session(timeout: float, headers: Optional[Dict[str, str]] = None) -> aiohttp.ClientSession:
    """Create a client session with a per-request total timeout."""
    return aiohttp.ClientSession(
        headers={**DEFAULT_HEADERS, **(headers or {})},
        timeout=aiohttp.ClientTimeout(total=timeout),
    )
