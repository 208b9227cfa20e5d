# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
The dependency bundle handed to both stores.

Storage, randomness and time are injected here instead of being looked up
from module globals, so tests can swap in an in-memory engine, a fixed token
source or a clock they control.
"""

from dataclasses import dataclass, field
from typing import Callable

from sqlalchemy.orm import sessionmaker

from userutil.core import security
from userutil.models import Models

DEFAULT_SESSION_EXPIRES = 3600


@dataclass
class StoreContext:
    session_factory: sessionmaker
    models: Models
    session_expires: int = DEFAULT_SESSION_EXPIRES
    clock: Callable[[], int] = field(default=security.now)
    token_source: Callable[[int], bytes] = field(default=security.new_token)
    reject_disabled: bool = True
    renew_expired: bool = True
