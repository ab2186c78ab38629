"""
seedpass.evaluator

Password evaluation:
- score_password(password): zxcvbn strength score (0-4) and its feedback
- evaluate_password(password, oracle): strength plus breach status, the
  payload of the "test" action
"""

from typing import Dict

from zxcvbn import zxcvbn

from .breach import BreachOracle
from .errors import PasswordRequired

# zxcvbn refuses (or crawls on) very long inputs
MAX_SCORED_LENGTH = 72


def score_password(password: str) -> Dict:
    """
    Returns {"score": int 0..4, "feedback": {"warning": str, "suggestions": [str]}}.
    Feedback is passed through from zxcvbn untouched.
    """
    result = zxcvbn(password[:MAX_SCORED_LENGTH])
    return {
        "score": result["score"],
        "feedback": result["feedback"],
    }


def evaluate_password(password: str, oracle: BreachOracle) -> Dict:
    """
    Score `password` and look it up in the breach corpus.

    Oracle failures are not caught here; the caller reports them as an
    internal error.
    """
    if not password:
        raise PasswordRequired()
    strength = score_password(password)
    verdict = oracle.check(password)
    return {
        "pwned": verdict.pwned,
        "pwned_count": verdict.count,
        "strength_score": strength["score"],
        "strength_feedback": strength["feedback"],
    }
