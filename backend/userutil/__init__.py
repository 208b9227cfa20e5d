"""Identity and session store: user accounts and expiring bearer tokens."""

from userutil.core.results import Outcome, Result
from userutil.util import UserUtil

__all__ = ["Outcome", "Result", "UserUtil"]
