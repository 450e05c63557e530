"""Common utilities."""

from .async_http import create_session
from .logger import setup_logging

__all__ = ["create_session", "setup_logging"]
