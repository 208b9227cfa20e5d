# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Operation outcomes.

Store operations never raise to their caller.  Each one returns a
:class:`Result` whose ``outcome`` is one member of the closed
:class:`Outcome` enum and whose ``value`` carries the payload on success.
"""

import enum
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class Outcome(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"            # duplicate username
    REFUSED = "refused"              # session issuance denied
    INVALID = "invalid"              # caller input rejected
    STORAGE_ERROR = "storage_error"  # database raised; already logged


@dataclass(frozen=True)
class Result(Generic[T]):
    outcome: Outcome
    value: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    # -- constructors --------------------------------------------------------

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(Outcome.OK, value)

    @classmethod
    def not_found(cls) -> "Result":
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def conflict(cls) -> "Result":
        return cls(Outcome.CONFLICT)

    @classmethod
    def refused(cls) -> "Result":
        return cls(Outcome.REFUSED)

    @classmethod
    def invalid(cls) -> "Result":
        return cls(Outcome.INVALID)

    @classmethod
    def storage_error(cls) -> "Result":
        return cls(Outcome.STORAGE_ERROR)
