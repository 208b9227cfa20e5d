# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic models returned by the session store."""

from pydantic import BaseModel


class SessionInfo(BaseModel):
    id: str
    user_id: str
    token: bytes
    expire_at: int

    model_config = {"from_attributes": True}
