"""
pet_adoption.auth.passwords

One-way password hashing (bcrypt).

Responsibilities:
- Hash passwords with a per-hash random salt and configurable cost.
- Verify a candidate password by re-deriving, never by reversing.
"""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes and newer releases raise on longer input.
# Registration already rejects such passwords; the slice guards login attempts.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, *, rounds: int = 12) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False
