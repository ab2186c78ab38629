import json
import logging
import math
import re

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from seedpass.breach import PwnedPasswordsOracle
from seedpass.config import load_config
from seedpass.errors import ApiError, InternalError, MethodNotAllowed, UnknownAction
from seedpass.evaluator import evaluate_password
from seedpass.suggestions import SuggestionController

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SEEDPASS"] = load_config()

NO_STORE = {"Cache-Control": "no-store"}
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_length(value, default: int = 16, max_length: int = 128) -> int:
    """parseInt-style: leading integer of numbers/strings, else `default`."""
    n = None
    if isinstance(value, bool) or value is None:
        n = None
    elif isinstance(value, int):
        n = value
    elif isinstance(value, float):
        # inf and nan count as non-numeric
        n = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        m = _LEADING_INT.match(value)
        n = int(m.group(1)) if m else None
    if not n or n < 1:
        return default
    return min(n, max_length)


def get_oracle():
    oracle = current_app.config.get("BREACH_ORACLE")
    if oracle is None:
        oracle = PwnedPasswordsOracle.from_config(current_app.config["SEEDPASS"])
        current_app.config["BREACH_ORACLE"] = oracle
    return oracle


def get_controller() -> SuggestionController:
    cfg = current_app.config["SEEDPASS"]
    return SuggestionController(
        get_oracle(),
        random_source=current_app.config.get("RANDOM_SOURCE"),
        max_attempts=int(cfg.get("max_attempts", 8)),
        hash_name=cfg.get("hash_name", "sha1"),
    )


def _error(err: ApiError):
    return jsonify(err.to_dict()), err.status_code


@app.errorhandler(ApiError)
def handle_api_error(e: ApiError):
    return _error(e)


@app.errorhandler(405)
def handle_method_not_allowed(e):
    return _error(MethodNotAllowed())


@app.errorhandler(Exception)
def handle_unexpected(e: Exception):
    if isinstance(e, HTTPException):
        return e
    logger.exception("Unhandled error in check-password")
    return _error(InternalError(str(e)))


@app.route('/')
def home():
    return jsonify({
        "message": "SeedPass API is running"
    })


def run_test_action(data: dict):
    password = data.get('password') or ''
    if not isinstance(password, str):
        password = str(password)
    return evaluate_password(password, get_oracle())


def run_suggest_action(data: dict):
    cfg = current_app.config["SEEDPASS"]
    seed = data.get('seed') or ''
    if not isinstance(seed, str):
        seed = str(seed)
    length = parse_length(
        data.get('length'),
        default=int(cfg.get("default_length", 16)),
        max_length=int(cfg.get("max_length", 128)),
    )
    symbols = bool(data.get('symbols'))
    result = get_controller().suggest(seed, length=length, use_symbols=symbols)
    return {
        'suggested_password': result.password,
        'suggested_password_score': result.strength['score'],
        'strength_feedback': result.strength['feedback'],
    }


ACTIONS = {
    'test': run_test_action,
    'suggest': run_suggest_action,
}


@app.route('/check-password', methods=['POST'], provide_automatic_options=False)
@app.route('/.netlify/functions/check-password', methods=['POST'], provide_automatic_options=False)
def check_password_route():
    data = json.loads(request.get_data(as_text=True) or "{}")
    if data is None:
        raise InternalError("request body is null")
    if not isinstance(data, dict):
        data = {}
    action = data.get('action') or 'test'
    handler = ACTIONS.get(action) if isinstance(action, str) else None
    if handler is None:
        raise UnknownAction()
    return jsonify(handler(data)), 200, NO_STORE


if __name__ == "__main__":
    app.run(debug=True)
