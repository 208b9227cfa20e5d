# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy engine and session-factory helpers, and the unit-of-work context
manager the stores run every operation inside.

Nothing here is a module-level singleton: the engine is the caller's storage
handle and is threaded through the store context.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def make_engine(database_url: str) -> Engine:
    # pool_pre_ping keeps idle connections alive across MySQL's wait_timeout
    return create_engine(database_url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """
    Yield a session for the duration of one store operation.  Commits on a
    clean exit, rolls back and re-raises on error, always closes.
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
