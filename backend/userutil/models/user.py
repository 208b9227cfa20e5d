# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""User ORM model."""

import uuid

from sqlalchemy import Boolean, Column, Integer, LargeBinary, String


def new_id() -> str:
    return str(uuid.uuid4())


def user_model(base, table_name: str = "Users"):
    """
    Declare the User mapping on *base* under *table_name*.  The table name is
    configurable per store, so the class is built against a per-instance
    declarative base rather than at import time.
    """

    class User(base):
        __tablename__ = table_name

        id = Column("ID", String(36), primary_key=True, default=new_id)
        username = Column(String(255), unique=True, nullable=False, index=True)
        # Caller-supplied credential hash, stored verbatim.  Never hashed here.
        passwd = Column(LargeBinary, nullable=False)
        # Unix seconds
        created_at = Column(Integer, nullable=False)
        last_edited_at = Column(Integer, nullable=False)
        disabled = Column(Boolean, nullable=False, default=False)

    return User
