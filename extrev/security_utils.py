"""
Password hashing and session token helpers
"""

import logging
import re
import secrets

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SPECIAL_CHARACTERS = "@$!%*?&"


def hash_password_bcrypt(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


def password_problems(password: str) -> list[str]:
    """
    Every rule the password breaks, in display order.
    An empty list means the password is acceptable.
    """
    problems = []
    if len(password) < 8:
        problems.append("Password must be at least 8 characters long")
    if re.search(r"\s", password):
        problems.append("Password must not contain whitespace")
    if not re.search(r"[A-Z]", password):
        problems.append("Password must contain an uppercase letter")
    if not re.search(r"[a-z]", password):
        problems.append("Password must contain a lowercase letter")
    if not re.search(r"\d", password):
        problems.append("Password must contain a number")
    if not any(ch in SPECIAL_CHARACTERS for ch in password):
        problems.append(f"Password must contain one of {SPECIAL_CHARACTERS}")
    return problems


def generate_session_token() -> str:
    """Opaque, URL-safe session id for the session cookie"""
    return secrets.token_urlsafe(32)
