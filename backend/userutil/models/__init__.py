# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""ORM mappings for the two relations, bound to a per-store declarative base."""

from dataclasses import dataclass

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

from userutil.models.session import session_model
from userutil.models.user import user_model


@dataclass(frozen=True)
class Models:
    metadata: MetaData
    User: type
    Session: type


def build_models(users_table_name: str = "Users", sessions_table_name: str = "Sessions") -> Models:
    Base = declarative_base()
    return Models(
        metadata=Base.metadata,
        User=user_model(Base, users_table_name),
        Session=session_model(Base, sessions_table_name),
    )
