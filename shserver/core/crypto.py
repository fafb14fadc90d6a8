"""bcrypt helpers for script passwords."""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes; longer secrets are refused outright.
MAX_PASSWORD_BYTES = 72
DEFAULT_ROUNDS = 12


class PasswordTooLongError(ValueError):
    """Raised when a password exceeds what bcrypt can hash."""


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise PasswordTooLongError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored hash in constant time.

    Over-long input and malformed hashes count as a mismatch.
    """
    raw = plain_password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["DEFAULT_ROUNDS", "MAX_PASSWORD_BYTES", "PasswordTooLongError", "hash_password", "verify_password"]
