"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

from agriforum.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload issued by the identity provider."""

    user_id: str
    email: Optional[str] = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str, settings: AuthSettings, email: Optional[str] = None
) -> str:
    """Create a JWT token for the user.

    The identity provider issues tokens in production; this is used by
    local tooling and tests.

    Args:
        user_id: User ID
        settings: Authentication settings
        email: Optional email claim

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload: dict[str, object] = {
        "user_id": user_id,
        "exp": expiry,
    }
    if email is not None:
        payload["email"] = email

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return token


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
