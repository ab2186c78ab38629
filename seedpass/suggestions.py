"""
seedpass.suggestions

Seeded password suggestions that avoid the breach corpus. Candidates are
built from the user's seed plus fresh entropy and checked against a breach
oracle, up to a fixed number of attempts; after that a seed-independent
candidate is returned.

Note: the fallback candidate is returned without being checked against the
oracle, so a request can never block on a misbehaving breach service.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Union

from .breach import BreachOracle
from .errors import OracleUnavailable, SeedRequired
from .evaluator import score_password
from .generator import DEFAULT_HASH, RandomSource, generate_from_seed, random_token

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 8


@dataclass(frozen=True)
class Found:
    password: str
    attempts: int


@dataclass(frozen=True)
class Exhausted:
    password: str
    attempts: int


Outcome = Union[Found, Exhausted]


@dataclass
class SuggestionResult:
    password: str
    attempts_used: int
    strength: Dict = field(default_factory=dict)
    exhausted: bool = False


class SuggestionController:
    def __init__(
        self,
        oracle: BreachOracle,
        random_source: Optional[RandomSource] = None,
        scorer: Callable[[str], Dict] = score_password,
        max_attempts: int = MAX_ATTEMPTS,
        assume_unbreached_on_error: bool = True,
        hash_name: str = DEFAULT_HASH,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.oracle = oracle
        self.random_source = random_source
        self.scorer = scorer
        self.max_attempts = max_attempts
        self.assume_unbreached_on_error = assume_unbreached_on_error
        self.hash_name = hash_name

    def _build(self, seed: str, length: int, use_symbols: bool) -> str:
        return generate_from_seed(
            seed,
            length=length,
            use_symbols=use_symbols,
            random_source=self.random_source,
            hash_name=self.hash_name,
        )

    def _is_pwned(self, candidate: str) -> bool:
        try:
            return self.oracle.check(candidate).pwned
        except OracleUnavailable as e:
            if not self.assume_unbreached_on_error:
                raise
            logger.warning("Breach lookup unavailable, accepting candidate unchecked: %s", e)
            return False

    def find_candidate(self, seed: str, length: int, use_symbols: bool) -> Outcome:
        """First unbreached seeded candidate, or an unchecked fallback once attempts run out."""
        for attempt in range(1, self.max_attempts + 1):
            candidate = self._build(seed + random_token(self.random_source), length, use_symbols)
            if not self._is_pwned(candidate):
                return Found(candidate, attempt)
            logger.info("Candidate %d/%d found in breach corpus, retrying", attempt, self.max_attempts)
        logger.warning("No unbreached candidate after %d attempts, using unseeded fallback", self.max_attempts)
        fallback = self._build(random_token(self.random_source), length, use_symbols)
        return Exhausted(fallback, self.max_attempts)

    def suggest(self, seed: str, length: int = 16, use_symbols: bool = False) -> SuggestionResult:
        if not seed or not seed.strip():
            raise SeedRequired()
        outcome = self.find_candidate(seed, length, use_symbols)
        return SuggestionResult(
            password=outcome.password,
            attempts_used=outcome.attempts,
            strength=self.scorer(outcome.password),
            exhausted=isinstance(outcome, Exhausted),
        )
