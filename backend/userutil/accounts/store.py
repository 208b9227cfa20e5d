# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Account store – user identity records.

Every public method runs in its own unit of work and returns a
:class:`~userutil.core.results.Result`.  Storage errors are logged and
downgraded to ``STORAGE_ERROR``; nothing propagates to the caller.

Notes
-----
* Credentials arrive already hashed.  They are stored verbatim as bytes.
* ``last_edited_at`` is refreshed on every mutation, even one that leaves
  the row otherwise unchanged.
* Deleting a user does not touch its sessions.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from userutil.accounts.schemas import UserInfo
from userutil.context import StoreContext
from userutil.core.logger import logger
from userutil.core.results import Result
from userutil.core.security import BytesLike, is_bytes_like, to_bytes
from userutil.database import session_scope


class AccountStore:
    def __init__(self, ctx: StoreContext):
        self.ctx = ctx
        self.User = ctx.models.User

    # -- creation --------------------------------------------------------------

    def create_user(self, username: str, passwd: BytesLike) -> Result[None]:
        """
        Register a new account.  Returns CONFLICT if the username is taken,
        INVALID if it is empty or the credential is not bytes / str.  The
        created record is never returned.
        """
        if not username or not isinstance(username, str) or not is_bytes_like(passwd):
            return Result.invalid()

        now = self.ctx.clock()
        try:
            with session_scope(self.ctx.session_factory) as db:
                exists = db.query(self.User).filter(self.User.username == username).first()
                if exists is not None:
                    return Result.conflict()

                db.add(
                    self.User(
                        username=username,
                        passwd=to_bytes(passwd),
                        created_at=now,
                        last_edited_at=now,
                        disabled=False,
                    )
                )
        except IntegrityError:
            # Lost a race with a concurrent insert of the same username
            return Result.conflict()
        except SQLAlchemyError:
            logger.exception("[create_user] storage error")
            return Result.storage_error()

        logger.info("User created: %s", username)
        return Result.success()

    # -- mutation --------------------------------------------------------------

    def edit_user_info(
        self,
        user_id: str,
        username: Optional[str] = None,
        passwd: Optional[BytesLike] = None,
    ) -> Result[None]:
        """
        Partial update.  Only supplied fields change; last_edited_at is
        always refreshed.
        """
        if username is not None and not isinstance(username, str):
            return Result.invalid()
        if passwd is not None and not is_bytes_like(passwd):
            return Result.invalid()

        try:
            with session_scope(self.ctx.session_factory) as db:
                user = db.get(self.User, user_id)
                if user is None:
                    return Result.not_found()

                if username:
                    user.username = username
                if passwd:
                    user.passwd = to_bytes(passwd)
                user.last_edited_at = self.ctx.clock()
        except IntegrityError:
            return Result.conflict()
        except SQLAlchemyError:
            logger.exception("[edit_user_info] storage error")
            return Result.storage_error()

        return Result.success()

    def disable_user(self, user_id: str) -> Result[None]:
        return self._set_disabled(user_id, True)

    def enable_user(self, user_id: str) -> Result[None]:
        return self._set_disabled(user_id, False)

    def _set_disabled(self, user_id: str, disabled: bool) -> Result[None]:
        action = "disable_user" if disabled else "enable_user"
        try:
            with session_scope(self.ctx.session_factory) as db:
                user = db.get(self.User, user_id)
                if user is None:
                    return Result.not_found()

                user.disabled = disabled
                user.last_edited_at = self.ctx.clock()
        except SQLAlchemyError:
            logger.exception("[%s] storage error", action)
            return Result.storage_error()

        logger.info("User %s: %s", "disabled" if disabled else "enabled", user_id)
        return Result.success()

    # -- lookup ----------------------------------------------------------------

    def get_user_info(self, user_id: str) -> Result[UserInfo]:
        """Return every attribute of the account, raw credential hash included."""
        try:
            with session_scope(self.ctx.session_factory) as db:
                user = db.get(self.User, user_id)
                if user is None:
                    return Result.not_found()
                return Result.success(UserInfo.model_validate(user))
        except SQLAlchemyError:
            logger.exception("[get_user_info] storage error")
            return Result.storage_error()

    def get_id(self, username: str) -> Result[str]:
        try:
            with session_scope(self.ctx.session_factory) as db:
                user = db.query(self.User).filter(self.User.username == username).first()
                if user is None:
                    return Result.not_found()
                return Result.success(user.id)
        except SQLAlchemyError:
            logger.exception("[get_id] storage error")
            return Result.storage_error()

    # -- deletion --------------------------------------------------------------

    def delete_user(self, user_id: str) -> Result[None]:
        """Hard delete.  Sessions belonging to the user are left in place."""
        try:
            with session_scope(self.ctx.session_factory) as db:
                deleted = (
                    db.query(self.User)
                    .filter(self.User.id == user_id)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError:
            logger.exception("[delete_user] storage error")
            return Result.storage_error()

        if deleted == 0:
            return Result.not_found()
        logger.info("User deleted: %s", user_id)
        return Result.success()
