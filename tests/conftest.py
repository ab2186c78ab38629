import itertools

import pytest

from seedpass.breach import BreachVerdict
from seedpass.errors import OracleUnavailable


class FixedRandomSource:
    """Replays a fixed byte pattern forever."""

    def __init__(self, pattern: bytes = b"\x00"):
        self._it = itertools.cycle(pattern)

    def token_bytes(self, n: int) -> bytes:
        return bytes(next(self._it) for _ in range(n))


class StubOracle:
    """In-memory breach corpus: {secret: count}. Records every lookup."""

    def __init__(self, breached=None, pwn_everything=False, fail=False):
        self.breached = dict(breached or {})
        self.pwn_everything = pwn_everything
        self.fail = fail
        self.calls = []

    def check(self, secret: str) -> BreachVerdict:
        self.calls.append(secret)
        if self.fail:
            raise OracleUnavailable("stub oracle offline")
        if self.pwn_everything:
            return BreachVerdict(pwned=True, count=1)
        if secret in self.breached:
            return BreachVerdict(pwned=True, count=self.breached[secret])
        return BreachVerdict(pwned=False, count=0)


@pytest.fixture
def oracle():
    return StubOracle({"password": 10434004})


@pytest.fixture
def zero_bytes():
    return FixedRandomSource(b"\x00")
