"""Admin authentication service for the Plinko backend.

This module handles admin authentication using JWT tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from plinko.config import settings

JWT_ALGORITHM = "HS256"


def verify_admin_password(username: str, password: str) -> bool:
    """Verify admin username and password.

    Args:
        username: Admin username
        password: Plain text password

    Returns:
        True if credentials are valid, False otherwise
    """
    if username != settings.admin_username:
        return False

    # bcrypt.checkpw requires bytes
    password_bytes = password.encode("utf-8")
    hash_bytes = settings.admin_password_hash.encode("utf-8")

    try:
        return bcrypt.checkpw(password_bytes, hash_bytes)
    except ValueError:
        # malformed hash in configuration
        return False


def create_admin_token(username: str) -> str:
    """Create a JWT token for authenticated admin.

    Args:
        username: Admin username

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "role": "admin",
        "exp": now + timedelta(hours=settings.jwt_expiration_hours),
        "iat": now,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def verify_admin_token(token: str) -> Optional[dict]:
    """Verify and decode an admin JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload if valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    # Verify it's an admin token
    if payload.get("role") != "admin":
        return None

    return payload


def hash_password(password: str) -> str:
    """Hash a password for the ADMIN_PASSWORD_HASH setting."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")
