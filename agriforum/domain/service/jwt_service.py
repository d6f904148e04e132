"""JWT token domain service."""

from uuid import UUID

import logfire
from pydantic import ValidationError as PydanticValidationError

from agriforum.config import AuthSettings
from agriforum.domain.value import UserId
from agriforum.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except (JWTError, PydanticValidationError) as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Extract user ID from JWT token without raising exceptions.

        This is a convenience method for API routes that need to optionally
        authenticate users without failing on invalid tokens.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return UserId(UUID(payload.user_id))
        except (JWTError, PydanticValidationError, ValueError) as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
