"""JWT token generation and validation for FocusFlow."""

import os
import jwt
from datetime import datetime, timedelta
from typing import Optional, Dict
from dotenv import load_dotenv

from focusflow.errors import UnauthenticatedError

load_dotenv()

# JWT configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user_id: User ID to encode in token
        expires_delta: Lifetime override (defaults to JWT_EXPIRATION_HOURS)

    Returns:
        Encoded JWT token string
    """
    now = datetime.utcnow()
    payload = {
        "sub": user_id,  # Subject (user ID)
        "exp": now + (expires_delta if expires_delta is not None else timedelta(hours=JWT_EXPIRATION_HOURS)),
        "iat": now,  # Issued at
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict:
    """Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload (dict with 'sub' key for user_id)

    Raises:
        UnauthenticatedError: if the token is expired or invalid
    """
    try:
        return jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Token has expired")
    except jwt.InvalidTokenError:
        raise UnauthenticatedError("Invalid token")


def get_user_id_from_token(token: str) -> str:
    """Extract user ID from a JWT token.

    Raises:
        UnauthenticatedError: if the token is invalid or carries no subject
    """
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError("Invalid token")
    return user_id
