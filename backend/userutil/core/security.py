# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Central security module.  Token generation, credential comparison and the
clock used for expiry arithmetic live here.  No other module should touch
raw randomness directly.

Responsibilities
----------------
1. Bearer-token generation                  (secrets, 32 bytes)
2. Credential comparison                    (hmac.compare_digest)
3. Byte coercion of caller-supplied values
4. Unix-seconds clock

Password hashing is deliberately absent: callers hand in credentials that
are already hashed and salted upstream.  They are stored and compared as
opaque bytes.
"""

import hmac
import secrets
import time
from typing import Union

# Length of a session token in bytes
TOKEN_BYTES = 32

# Compared against when the user does not exist, so that path costs the same
# compare_digest call as a real mismatch
DUMMY_CREDENTIAL = bytes(TOKEN_BYTES)

BytesLike = Union[bytes, bytearray, memoryview, str]


# ---------------------------------------------------------------------------
# 1.  Tokens
# ---------------------------------------------------------------------------


def new_token(nbytes: int = TOKEN_BYTES) -> bytes:
    """Return *nbytes* of cryptographically strong randomness."""
    return secrets.token_bytes(nbytes)


# ---------------------------------------------------------------------------
# 2.  Credential comparison
# ---------------------------------------------------------------------------


def credentials_match(stored: bytes, supplied: bytes) -> bool:
    """
    Exact-length, full-content comparison of two credential hashes.

    compare_digest runs in time independent of where the first differing
    byte is, so a mismatch does not leak a matching prefix length.
    """
    return hmac.compare_digest(bytes(stored), bytes(supplied))


# ---------------------------------------------------------------------------
# 3.  Coercion
# ---------------------------------------------------------------------------


_BINARY_TYPES = (bytes, bytearray, memoryview)


def is_bytes_like(value) -> bool:
    """True for the types to_bytes accepts: binary buffers and str."""
    return isinstance(value, _BINARY_TYPES + (str,))


def to_bytes(value: BytesLike) -> bytes:
    """
    Coerce a credential or token to bytes.  Strings are encoded UTF-8 as-is;
    nothing is hashed or decoded.  Anything else (None, ints …) is a
    TypeError rather than being guessed at.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, _BINARY_TYPES):
        return bytes(value)
    raise TypeError(f"expected bytes or str, got {type(value).__name__}")


# ---------------------------------------------------------------------------
# 4.  Clock
# ---------------------------------------------------------------------------


def now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())
