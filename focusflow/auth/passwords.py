"""Password hashing for FocusFlow (bcrypt).

Only the hash is ever stored; raw passwords are never logged.
"""

import os
from functools import lru_cache

import bcrypt
from dotenv import load_dotenv

load_dotenv()

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """A throwaway hash to verify against when the user does not exist."""
    return hash_password("focusflow-dummy-password")
