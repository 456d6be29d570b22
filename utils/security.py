"""
Password hashing helpers.

Only bcrypt hashes are stored; plain passwords never reach the database.
"""

import bcrypt

from config.settings import settings


def hash_password(password: str, rounds: int = None) -> str:
    """Return a bcrypt hash for ``password`` as text."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash. Malformed hashes never match."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
