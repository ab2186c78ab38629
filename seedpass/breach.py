"""
seedpass.breach

Breach lookups against the Pwned Passwords range API using k-anonymity:
only the first five characters of the SHA-1 hash ever leave the process.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

from .config import DEFAULTS
from .errors import OracleUnavailable

logger = logging.getLogger(__name__)

PREFIX_LEN = 5


@dataclass(frozen=True)
class BreachVerdict:
    pwned: bool
    count: int = 0
    hash_prefix: Optional[str] = None


class BreachOracle(Protocol):
    def check(self, secret: str) -> BreachVerdict:
        ...


def sha1_hex(secret: str) -> str:
    return hashlib.sha1(secret.encode("utf-8")).hexdigest().upper()


def split_hash(digest: str):
    return digest[:PREFIX_LEN], digest[PREFIX_LEN:]


def find_suffix(body: str, suffix: str) -> Optional[int]:
    """
    Scan a range response ("SUFFIX:COUNT" per line) for `suffix`.
    Returns the count (0 if unparsable) or None when the suffix is absent.
    Raises OracleUnavailable when a line has no separator.
    """
    wanted = suffix.upper()
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        if ":" not in line:
            raise OracleUnavailable("malformed range response")
        sfx, _, cnt = line.partition(":")
        if sfx.strip().upper() == wanted:
            try:
                return int(cnt.strip())
            except ValueError:
                return 0
    return None


class PwnedPasswordsOracle:
    """BreachOracle backed by the Pwned Passwords range endpoint."""

    def __init__(
        self,
        range_url: str = DEFAULTS["range_url"],
        user_agent: str = DEFAULTS["user_agent"],
        timeout: Optional[float] = DEFAULTS["request_timeout_seconds"],
        add_padding: bool = False,
        session: Optional[requests.Session] = None,
    ):
        self.range_url = range_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.add_padding = add_padding
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], session: Optional[requests.Session] = None) -> "PwnedPasswordsOracle":
        return cls(
            range_url=cfg.get("range_url", DEFAULTS["range_url"]),
            user_agent=cfg.get("user_agent", DEFAULTS["user_agent"]),
            timeout=cfg.get("request_timeout_seconds", DEFAULTS["request_timeout_seconds"]),
            add_padding=bool(cfg.get("add_padding", False)),
            session=session,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if self.add_padding:
            headers["Add-Padding"] = "true"
        return headers

    def fetch_range(self, prefix: str) -> str:
        url = f"{self.range_url}/{prefix}"
        try:
            resp = self.session.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise OracleUnavailable(f"range lookup failed: {e}") from e
        if resp.status_code != 200:
            raise OracleUnavailable(f"range lookup returned HTTP {resp.status_code}")
        return resp.text

    def check(self, secret: str) -> BreachVerdict:
        prefix, suffix = split_hash(sha1_hex(secret))
        logger.debug("Querying breach range %s", prefix)
        count = find_suffix(self.fetch_range(prefix), suffix)
        if count is None:
            return BreachVerdict(pwned=False, count=0, hash_prefix=prefix)
        return BreachVerdict(pwned=True, count=count, hash_prefix=prefix)
