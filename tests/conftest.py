from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from userutil import UserUtil

START = 1_700_000_000
HASH = bytes(range(1, 33))


class FakeClock:
    def __init__(self, now: int = START) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class CountingTokens:
    """Distinct, predictable tokens so tests can tell sessions apart."""

    def __init__(self) -> None:
        self.issued = 0

    def __call__(self, nbytes: int) -> bytes:
        self.issued += 1
        return self.issued.to_bytes(nbytes, "big")


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokens() -> CountingTokens:
    return CountingTokens()


@pytest.fixture
def make_util(engine, clock, tokens):
    def _make(**kwargs) -> UserUtil:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("token_source", tokens)
        util = UserUtil(engine, **kwargs)
        util.init()
        return util

    return _make


@pytest.fixture
def util(make_util) -> UserUtil:
    return make_util()


@pytest.fixture
def alice(util) -> str:
    assert util.create_user("alice", HASH).ok
    return util.get_id("alice").value
