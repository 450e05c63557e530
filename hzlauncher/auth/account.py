"""Account credentials consumed by the launcher."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel


class MsCredentials(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: datetime
    xbox_token: str
    xsts_token: str
    user_hash: str


class McCredentials(BaseModel):
    access_token: str
    expires_at: datetime


class Account(BaseModel):
    """A signed-in Minecraft account, obtained and refreshed elsewhere."""
    name: str
    id: str
    ms_creds: MsCredentials
    mc_creds: McCredentials

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the Minecraft access token has expired."""
        now = now or datetime.now(timezone.utc)
        expires_at = self.mc_creds.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now
