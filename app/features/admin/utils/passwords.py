import hashlib
import re
from typing import Optional

import bcrypt

from app.platform.config import settings
from app.platform.exceptions import PasswordHashError

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PASSWORD_SYMBOLS = "@$!%*?&"

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"\d"), "Password must contain at least one number"),
    (
        re.compile(f"[{re.escape(PASSWORD_SYMBOLS)}]"),
        f"Password must contain at least one special character ({PASSWORD_SYMBOLS})",
    ),
)


def _prehash(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes of its input
    return hashlib.sha256(password.encode("utf-8")).digest()


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(_prehash(password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    A wrong password returns False. A missing or malformed hash is a storage
    problem, not a login failure, so it raises PasswordHashError.
    """
    if not hashed_password:
        raise PasswordHashError("Stored password hash is missing")

    try:
        return bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
    except ValueError as e:
        raise PasswordHashError("Stored password hash is malformed") from e


def validate_password_strength(password: str) -> str:
    """Raise ValueError with the first policy violation, return the password otherwise."""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password cannot exceed {PASSWORD_MAX_LENGTH} characters")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(message)
    return password
