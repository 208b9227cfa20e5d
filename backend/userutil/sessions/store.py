# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Session store – credential-gated bearer tokens.

Lifecycle
---------
Active   expire_at >= now
Expired  expire_at <  now, row still present until reaped
Purged   row deleted by check_session (lazy reap), terminate_session or the
         clean_session sweep.  There is no way back from Purged.

Security notes
--------------
* create_session answers REFUSED whether the user does not exist, the
  credential is wrong, or the account is disabled.  Callers cannot tell
  which check failed.
* Tokens are never written to the log.
* Credentials and tokens must be bytes or str; anything else is INVALID.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from userutil.accounts.store import AccountStore
from userutil.context import StoreContext
from userutil.core.logger import logger
from userutil.core.results import Outcome, Result
from userutil.core.security import (
    DUMMY_CREDENTIAL,
    TOKEN_BYTES,
    BytesLike,
    credentials_match,
    is_bytes_like,
    to_bytes,
)
from userutil.database import session_scope
from userutil.sessions.schemas import SessionInfo


class SessionStore:
    def __init__(self, ctx: StoreContext, accounts: AccountStore):
        self.ctx = ctx
        self.accounts = accounts
        self.Session = ctx.models.Session

    # -- issuance --------------------------------------------------------------

    def create_session(self, user_id: str, passwd: BytesLike) -> Result[bytes]:
        """Verify *passwd* against the stored hash and mint a 32-byte token."""
        if not is_bytes_like(passwd):
            return Result.invalid()

        found = self.accounts.get_user_info(user_id)
        if found.outcome is Outcome.STORAGE_ERROR:
            return Result.storage_error()

        # Unified refusal path – no information about which check failed
        user = found.value
        stored = user.passwd if user is not None else DUMMY_CREDENTIAL
        matched = credentials_match(stored, to_bytes(passwd))
        if (
            user is None
            or not matched
            or (user.disabled and self.ctx.reject_disabled)
        ):
            logger.info("Session refused for user id %s", user_id)
            return Result.refused()

        token = self.ctx.token_source(TOKEN_BYTES)
        expire_at = self.ctx.clock() + self.ctx.session_expires
        try:
            with session_scope(self.ctx.session_factory) as db:
                db.add(self.Session(user_id=user.id, token=token, expire_at=expire_at))
        except SQLAlchemyError:
            logger.exception("[create_session] storage error")
            return Result.storage_error()

        logger.info("Session issued for user %s, expires at %d", user.id, expire_at)
        return Result.success(token)

    # -- lookup ----------------------------------------------------------------

    def sessions_from_user(self, user_id: str) -> Result[List[SessionInfo]]:
        """All sessions of a user, stale ones included."""
        try:
            with session_scope(self.ctx.session_factory) as db:
                rows = db.query(self.Session).filter(self.Session.user_id == user_id).all()
                return Result.success([SessionInfo.model_validate(r) for r in rows])
        except SQLAlchemyError:
            logger.exception("[sessions_from_user] storage error")
            return Result.storage_error()

    def get_session_info(self, token: BytesLike) -> Result[SessionInfo]:
        """Raw lookup by token.  Does not check or reap expiry."""
        if not is_bytes_like(token):
            return Result.invalid()

        try:
            with session_scope(self.ctx.session_factory) as db:
                row = self._by_token(db, token)
                if row is None:
                    return Result.not_found()
                return Result.success(SessionInfo.model_validate(row))
        except SQLAlchemyError:
            logger.exception("[get_session_info] storage error")
            return Result.storage_error()

    def check_session(self, token: BytesLike) -> Result[bool]:
        """
        OK(True) for a live session, OK(False) for an unknown or expired one.
        An expired row is deleted on the way out.
        """
        if not is_bytes_like(token):
            return Result.invalid()

        try:
            with session_scope(self.ctx.session_factory) as db:
                row = self._by_token(db, token)
                if row is None:
                    return Result.success(False)

                if row.expire_at < self.ctx.clock():
                    db.delete(row)
                    return Result.success(False)

                return Result.success(True)
        except SQLAlchemyError:
            logger.exception("[check_session] storage error")
            return Result.storage_error()

    # -- renewal ---------------------------------------------------------------

    def renew_session(self, token: BytesLike, extend_seconds: Optional[int] = None) -> Result[None]:
        """
        Reset expiry to now + (extend_seconds or the default lifetime).  The
        new expiry replaces the old one; it is not added to it.

        With renew_expired on, a session that has expired but has not been
        reaped yet is revived.  With it off, such a session is reaped and
        NOT_FOUND is returned.
        """
        if not is_bytes_like(token):
            return Result.invalid()

        now = self.ctx.clock()
        try:
            with session_scope(self.ctx.session_factory) as db:
                row = self._by_token(db, token)
                if row is None:
                    return Result.not_found()

                if row.expire_at < now and not self.ctx.renew_expired:
                    db.delete(row)
                    return Result.not_found()

                row.expire_at = now + (extend_seconds or self.ctx.session_expires)
        except SQLAlchemyError:
            logger.exception("[renew_session] storage error")
            return Result.storage_error()

        return Result.success()

    # -- removal ---------------------------------------------------------------

    def terminate_session(self, token: BytesLike) -> Result[None]:
        """Delete a session regardless of its expiry state."""
        if not is_bytes_like(token):
            return Result.invalid()

        try:
            with session_scope(self.ctx.session_factory) as db:
                deleted = (
                    db.query(self.Session)
                    .filter(self.Session.token == to_bytes(token))
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError:
            logger.exception("[terminate_session] storage error")
            return Result.storage_error()

        if deleted == 0:
            return Result.not_found()
        logger.info("Session terminated")
        return Result.success()

    def terminate_user_sessions(self, user_id: str) -> Result[int]:
        """Delete every session owned by *user_id*.  Value is the row count."""
        try:
            with session_scope(self.ctx.session_factory) as db:
                deleted = (
                    db.query(self.Session)
                    .filter(self.Session.user_id == user_id)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError:
            logger.exception("[terminate_user_sessions] storage error")
            return Result.storage_error()

        logger.info("Terminated %d session(s) for user %s", deleted, user_id)
        return Result.success(deleted)

    def clean_session(self) -> Result[int]:
        """
        Batch sweep: delete every session whose expiry is strictly in the
        past.  Scheduling is the caller's job.  Value is the row count.
        """
        now = self.ctx.clock()
        try:
            with session_scope(self.ctx.session_factory) as db:
                deleted = (
                    db.query(self.Session)
                    .filter(self.Session.expire_at < now)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError:
            logger.exception("[clean_session] storage error")
            return Result.storage_error()

        if deleted:
            logger.info("Swept %d expired session(s)", deleted)
        return Result.success(deleted)

    # -------------------------------------------------------------------------

    def _by_token(self, db, token: BytesLike):
        return db.query(self.Session).filter(self.Session.token == to_bytes(token)).first()
