# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic models returned by the account store."""

from pydantic import BaseModel


class UserInfo(BaseModel):
    id: str
    username: str
    passwd: bytes  # raw credential hash – internal callers only
    created_at: int
    last_edited_at: int
    disabled: bool

    model_config = {"from_attributes": True}
