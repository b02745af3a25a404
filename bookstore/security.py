"""
Password hashing helpers.

Passwords are stored as salted bcrypt digests. The work factor is
configurable per service through ``BCRYPT_ROUNDS``.
"""

from typing import Optional

import bcrypt

DEFAULT_ROUNDS = 10

# Compared against when the email is unknown so a failed login costs
# the same time whether or not the account exists.
_dummy_hash: Optional[str] = None


def get_password_hash(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plain password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored digest."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Malformed stored digest, or a password bcrypt refuses (> 72 bytes)
        return False


def burn_password_check(plain_password: str, rounds: int = DEFAULT_ROUNDS) -> None:
    """Run a verification that always fails, at the configured cost."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = get_password_hash("not-a-real-password", rounds=rounds)
    verify_password(plain_password, _dummy_hash)
