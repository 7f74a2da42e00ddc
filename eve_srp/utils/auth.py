"""Password hashing and credential rules"""
import re
from typing import List

import bcrypt

from eve_srp.config import settings

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,32}$")
PASSWORD_MIN_LENGTH = 8
_SPECIAL_CHARS = re.compile(r"[^A-Za-z0-9]")


def hash_password(password: str) -> str:
    """Hash password using bcrypt with configured rounds"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# Hash of a throwaway secret, checked when the username is unknown so that
# response time does not reveal whether an account exists.
_DUMMY_HASH = hash_password("dummy-password-for-timing")


def burn_password_check(plain_password: str) -> None:
    """Run a bcrypt comparison that always fails"""
    verify_password(plain_password, _DUMMY_HASH)


def password_problems(password: str) -> List[str]:
    """Return one message per unmet password-strength rule (empty when strong)"""
    problems: List[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(password.encode("utf-8")) > 72:
        problems.append("Password must be at most 72 bytes long")
    if not re.search(r"[A-Z]", password):
        problems.append("Password must contain an uppercase letter")
    if not re.search(r"[a-z]", password):
        problems.append("Password must contain a lowercase letter")
    if not re.search(r"[0-9]", password):
        problems.append("Password must contain a digit")
    if not _SPECIAL_CHARS.search(password):
        problems.append("Password must contain a special character")
    return problems


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_PATTERN.match(username))
