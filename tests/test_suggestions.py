import pytest

from conftest import FixedRandomSource, StubOracle
from seedpass.breach import BreachVerdict
from seedpass.errors import OracleUnavailable, SeedRequired
from seedpass.generator import DEFAULT_SYMBOLS
from seedpass.suggestions import Exhausted, Found, SuggestionController


def flat_scorer(password):
    return {"score": 4, "feedback": {"warning": "", "suggestions": []}}


class PwnFirst:
    """Reports the first `n` lookups as breached."""

    def __init__(self, n):
        self.n = n
        self.calls = []

    def check(self, secret):
        self.calls.append(secret)
        return BreachVerdict(pwned=len(self.calls) <= self.n, count=1)


def test_first_clean_candidate_wins():
    oracle = StubOracle()
    result = SuggestionController(oracle, scorer=flat_scorer).suggest("MyDogFido", length=16, use_symbols=True)
    assert result.attempts_used == 1
    assert not result.exhausted
    assert oracle.calls == [result.password]
    pw = result.password
    assert len(pw) == 16
    assert any(c.isupper() for c in pw)
    assert any(c.islower() for c in pw)
    assert any(c.isdigit() for c in pw)
    assert any(c in DEFAULT_SYMBOLS for c in pw)

def test_retries_past_breached_candidates():
    oracle = PwnFirst(3)
    outcome = SuggestionController(oracle, scorer=flat_scorer).find_candidate("MyDogFido", 12, False)
    assert isinstance(outcome, Found)
    assert outcome.attempts == 4
    assert outcome.password == oracle.calls[-1]
    assert len(oracle.calls) == 4

def test_exhausted_falls_back_unchecked():
    oracle = StubOracle(pwn_everything=True)
    controller = SuggestionController(oracle, scorer=flat_scorer)
    outcome = controller.find_candidate("MyDogFido", 20, True)
    assert isinstance(outcome, Exhausted)
    assert len(oracle.calls) == 8
    assert len(outcome.password) == 20

    result = controller.suggest("MyDogFido", length=20, use_symbols=True)
    assert result.exhausted
    assert result.attempts_used == 8
    assert len(result.password) == 20

def test_oracle_failure_counts_as_clean():
    oracle = StubOracle(fail=True)
    result = SuggestionController(oracle, scorer=flat_scorer).suggest("seed", length=10)
    assert result.attempts_used == 1
    assert len(oracle.calls) == 1
    assert len(result.password) == 10

def test_strict_policy_surfaces_oracle_failure():
    controller = SuggestionController(StubOracle(fail=True), scorer=flat_scorer, assume_unbreached_on_error=False)
    with pytest.raises(OracleUnavailable):
        controller.suggest("seed")

@pytest.mark.parametrize("seed", ["", "   ", "\t\n"])
def test_seed_required(seed):
    oracle = StubOracle()
    with pytest.raises(SeedRequired):
        SuggestionController(oracle, scorer=flat_scorer).suggest(seed)
    assert oracle.calls == []

def test_strength_comes_from_scorer():
    result = SuggestionController(StubOracle()).suggest("MyDogFido", length=16, use_symbols=True)
    assert 0 <= result.strength["score"] <= 4
    assert "suggestions" in result.strength["feedback"]

def test_reproducible_with_fixed_bytes():
    a = SuggestionController(StubOracle(), FixedRandomSource(b"\x05\x42\x99"), scorer=flat_scorer).suggest("Fido")
    b = SuggestionController(StubOracle(), FixedRandomSource(b"\x05\x42\x99"), scorer=flat_scorer).suggest("Fido")
    assert a.password == b.password

def test_custom_attempt_budget():
    oracle = StubOracle(pwn_everything=True)
    result = SuggestionController(oracle, scorer=flat_scorer, max_attempts=3).suggest("seed")
    assert result.exhausted
    assert len(oracle.calls) == 3

def test_invalid_attempt_budget():
    with pytest.raises(ValueError):
        SuggestionController(StubOracle(), max_attempts=0)
