# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Session ORM model."""

from sqlalchemy import Column, Integer, LargeBinary, String
from sqlalchemy.dialects.mysql import VARBINARY

from userutil.models.user import new_id

# MySQL cannot index a BLOB without a prefix length; use a fixed VARBINARY there
TOKEN_TYPE = LargeBinary(32).with_variant(VARBINARY(32), "mysql")


def session_model(base, table_name: str = "Sessions"):
    """Declare the Session mapping on *base* under *table_name*."""

    class Session(base):
        __tablename__ = table_name

        id = Column("ID", String(36), primary_key=True, default=new_id)
        # Owning user.  No FK constraint: deleting a user leaves its sessions
        # in place until they expire or are terminated.
        user_id = Column("UserID", String(36), nullable=False, index=True)
        # 32 random bytes – the bearer credential and lookup key
        token = Column("Token", TOKEN_TYPE, nullable=False, index=True)
        # Absolute expiry, Unix seconds
        expire_at = Column("Expire_at", Integer, nullable=False, index=True)

    return Session
