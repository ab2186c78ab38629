"""
seedpass.generator
Seeded password candidates: the seed biases casing and character order,
the bulk of the password comes from a cryptographically secure byte source.
"""

import hashlib
import secrets
import string
from typing import List, Optional, Protocol


UPPER = string.ascii_uppercase
LOWER = string.ascii_lowercase
DIGITS = string.digits
DEFAULT_SYMBOLS = "!@#$%^&*()-_=+[]{}<>?"
DEFAULT_HASH = "sha1"

# number of seed characters carried into the password
SEED_PREFIX_CHARS = 4
# reserved random bytes, one per repairable character class
RESERVED_BYTES = 4


class RandomSource(Protocol):
    def token_bytes(self, n: int) -> bytes:
        ...


class SystemRandomSource:
    """RandomSource backed by the operating system CSPRNG."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


_sysrand = SystemRandomSource()


def random_token(random_source: Optional[RandomSource] = None) -> str:
    """Fresh numeric string used to salt seeds between attempts."""
    src = random_source or _sysrand
    return str(int.from_bytes(src.token_bytes(8), "big"))


def seed_digest(
    seed: str,
    hash_name: str = DEFAULT_HASH,
    random_source: Optional[RandomSource] = None,
) -> str:
    """
    Lowercase hex digest of `seed`. An empty seed is replaced by a random
    token so the digest never hashes an empty buffer.
    """
    if not seed:
        seed = random_token(random_source)
    h = hashlib.new(hash_name)
    h.update(seed.encode("utf-8"))
    return h.hexdigest()


def normalize_base(seed: str) -> str:
    return "".join(c for c in seed if c.isascii() and c.isalnum())


def seeded_prefix(base: str, digest: str) -> str:
    """Up to four base characters, cased by the parity of the matching digest nibble."""
    out = []
    for i in range(min(SEED_PREFIX_CHARS, len(base))):
        nib = int(digest[i], 16)
        c = base[i]
        out.append(c.lower() if nib % 2 == 0 else c.upper())
    return "".join(out)


def _has_any(pw: str, pool: str) -> bool:
    return any(c in pool for c in pw)


def _overwrite(pw: str, pos: int, c: str) -> str:
    # slicing clamps: past the end the character is appended
    return pw[:pos] + c + pw[pos + 1:]


def repair_classes(pw: str, rnd: bytes, use_symbols: bool) -> str:
    """
    Make sure every required character class appears, overwriting fixed
    positions 0..3 (upper, lower, digit, symbol) when a class is missing.

    A repair can clobber the only member of a class checked earlier, so the
    pass repeats until nothing is missing. A repaired position only ever
    receives its own class, which bounds the number of passes.
    """
    pools = [UPPER, LOWER, DIGITS]
    if use_symbols:
        pools.append(DEFAULT_SYMBOLS)
    for _ in range(len(pools) + 1):
        changed = False
        for pos, pool in enumerate(pools):
            if not _has_any(pw, pool):
                pw = _overwrite(pw, pos, pool[rnd[pos % len(rnd)] % len(pool)])
                changed = True
        if not changed:
            break
    return pw


def digest_shuffle(chars: List[str], digest: str) -> List[str]:
    """Fisher-Yates shuffle driven by the digest instead of fresh randomness."""
    arr = list(chars)
    for i in range(len(arr) - 1, 0, -1):
        j = int(digest[i % len(digest)], 16) % (i + 1)
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def generate_from_seed(
    seed: str,
    length: int = 16,
    use_symbols: bool = True,
    random_source: Optional[RandomSource] = None,
    hash_name: str = DEFAULT_HASH,
) -> str:
    """
    Build a password candidate from `seed`.

    Callers that want different candidates for the same seed must mix
    fresh randomness into the seed themselves (see random_token).
    """
    if length <= 0:
        raise ValueError("length must be > 0")

    src = random_source or _sysrand
    digest = seed_digest(seed, hash_name, src)
    pw = seeded_prefix(normalize_base(seed), digest)

    all_chars = UPPER + LOWER + DIGITS + (DEFAULT_SYMBOLS if use_symbols else "")
    needed = max(length - len(pw), 0)
    rnd = src.token_bytes(max(needed, RESERVED_BYTES))
    pw += "".join(all_chars[b % len(all_chars)] for b in rnd[:needed])

    pw = repair_classes(pw, rnd, use_symbols)
    return "".join(digest_shuffle(list(pw), digest))[:length]
