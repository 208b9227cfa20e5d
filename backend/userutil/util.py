# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
UserUtil – the entry point that wires the two stores together.

Responsibilities
----------------
* Accept the storage handle (a SQLAlchemy engine) and the options.
* Declare both relations and create them on ``init()``.  A storage layer
  that cannot be initialised is fatal: the process exits with status 1.
* Expose every account and session operation.

Usage
-----
    util = UserUtil(engine, session_expires=1800)
    util.init()
    util.create_user("alice", hashed)
    token = util.create_session(util.get_id("alice").value, hashed).value
"""

import sys
from typing import Callable, List, Optional

from sqlalchemy.engine import Engine

from userutil.accounts.schemas import UserInfo
from userutil.accounts.store import AccountStore
from userutil.context import DEFAULT_SESSION_EXPIRES, StoreContext
from userutil.core import security
from userutil.core.config import Settings, settings as default_settings
from userutil.core.logger import logger
from userutil.core.results import Result
from userutil.core.security import BytesLike
from userutil.database import make_engine, make_session_factory
from userutil.models import build_models
from userutil.sessions.schemas import SessionInfo
from userutil.sessions.store import SessionStore


class UserUtil:
    def __init__(
        self,
        engine: Engine,
        users_table_name: Optional[str] = None,
        sessions_table_name: Optional[str] = None,
        session_expires: Optional[int] = None,
        *,
        clock: Optional[Callable[[], int]] = None,
        token_source: Optional[Callable[[int], bytes]] = None,
        reject_disabled: bool = True,
        renew_expired: bool = True,
    ):
        self.engine = engine
        self.users_table_name = users_table_name or "Users"
        self.sessions_table_name = sessions_table_name or "Sessions"
        self.session_expires = session_expires or DEFAULT_SESSION_EXPIRES
        self.clock = clock or security.now
        self.token_source = token_source or security.new_token
        self.reject_disabled = reject_disabled
        self.renew_expired = renew_expired

        self.accounts: Optional[AccountStore] = None
        self.sessions: Optional[SessionStore] = None

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None, **kwargs) -> "UserUtil":
        """Build an instance (engine included) from the configuration layer."""
        cfg = cfg or default_settings
        return cls(
            make_engine(cfg.database_url),
            users_table_name=cfg.users_table_name,
            sessions_table_name=cfg.sessions_table_name,
            session_expires=cfg.session_expires,
            reject_disabled=cfg.reject_disabled,
            renew_expired=cfg.renew_expired,
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # Initialisation
    # -------------------------------------------------------------------------

    def init(self) -> None:
        """
        Declare and create both relations.  Must run before any operation.
        Exits the process on failure – there is nothing useful to do without
        storage.
        """
        try:
            models = build_models(self.users_table_name, self.sessions_table_name)
            models.metadata.create_all(bind=self.engine)
        except Exception:
            logger.exception("[init] could not initialise storage")
            sys.exit(1)

        ctx = StoreContext(
            session_factory=make_session_factory(self.engine),
            models=models,
            session_expires=self.session_expires,
            clock=self.clock,
            token_source=self.token_source,
            reject_disabled=self.reject_disabled,
            renew_expired=self.renew_expired,
        )
        self.accounts = AccountStore(ctx)
        self.sessions = SessionStore(ctx, self.accounts)
        logger.info(
            "userutil initialised (users=%s, sessions=%s, lifetime=%ds)",
            self.users_table_name,
            self.sessions_table_name,
            self.session_expires,
        )

    def _ready(self, op: str) -> bool:
        if self.accounts is None or self.sessions is None:
            logger.warning("[%s] called before init()", op)
            return False
        return True

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def create_user(self, username: str, passwd: BytesLike) -> Result[None]:
        if not self._ready("create_user"):
            return Result.storage_error()
        return self.accounts.create_user(username, passwd)

    def edit_user_info(
        self,
        user_id: str,
        username: Optional[str] = None,
        passwd: Optional[BytesLike] = None,
    ) -> Result[None]:
        if not self._ready("edit_user_info"):
            return Result.storage_error()
        return self.accounts.edit_user_info(user_id, username=username, passwd=passwd)

    def get_user_info(self, user_id: str) -> Result[UserInfo]:
        if not self._ready("get_user_info"):
            return Result.storage_error()
        return self.accounts.get_user_info(user_id)

    def get_id(self, username: str) -> Result[str]:
        if not self._ready("get_id"):
            return Result.storage_error()
        return self.accounts.get_id(username)

    def delete_user(self, user_id: str) -> Result[None]:
        if not self._ready("delete_user"):
            return Result.storage_error()
        return self.accounts.delete_user(user_id)

    def disable_user(self, user_id: str) -> Result[None]:
        if not self._ready("disable_user"):
            return Result.storage_error()
        return self.accounts.disable_user(user_id)

    def enable_user(self, user_id: str) -> Result[None]:
        if not self._ready("enable_user"):
            return Result.storage_error()
        return self.accounts.enable_user(user_id)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(self, user_id: str, passwd: BytesLike) -> Result[bytes]:
        if not self._ready("create_session"):
            return Result.storage_error()
        return self.sessions.create_session(user_id, passwd)

    def sessions_from_user(self, user_id: str) -> Result[List[SessionInfo]]:
        if not self._ready("sessions_from_user"):
            return Result.storage_error()
        return self.sessions.sessions_from_user(user_id)

    def renew_session(self, token: BytesLike, extend_seconds: Optional[int] = None) -> Result[None]:
        if not self._ready("renew_session"):
            return Result.storage_error()
        return self.sessions.renew_session(token, extend_seconds)

    def clean_session(self) -> Result[int]:
        if not self._ready("clean_session"):
            return Result.storage_error()
        return self.sessions.clean_session()

    def get_session_info(self, token: BytesLike) -> Result[SessionInfo]:
        if not self._ready("get_session_info"):
            return Result.storage_error()
        return self.sessions.get_session_info(token)

    def check_session(self, token: BytesLike) -> Result[bool]:
        if not self._ready("check_session"):
            return Result.storage_error()
        return self.sessions.check_session(token)

    def terminate_session(self, token: BytesLike) -> Result[None]:
        if not self._ready("terminate_session"):
            return Result.storage_error()
        return self.sessions.terminate_session(token)

    def terminate_user_sessions(self, user_id: str) -> Result[int]:
        if not self._ready("terminate_user_sessions"):
            return Result.storage_error()
        return self.sessions.terminate_user_sessions(user_id)
