"""Account model consumed by the launcher."""

from .account import Account, McCredentials, MsCredentials

__all__ = ["Account", "McCredentials", "MsCredentials"]
