"""JWT token domain service."""

from uuid import UUID

import logfire

from discuss.config import AuthSettings
from discuss.domain.value import Actor, UserId
from discuss.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Turns identity provider tokens into Actors."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, actor: Actor, username: str | None = None) -> str:
        """Create a JWT token for an actor (development and tests)."""
        return create_token(
            str(actor.user_id), self.auth_settings, role=actor.role, username=username
        )

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
                logfire.info(
                    "JWT token verified", user_id=payload.user_id, role=payload.role.value
                )
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_actor_from_token(self, token: str | None) -> Actor | None:
        """Extract the acting identity without raising.

        Missing, invalid or expired tokens all mean "unauthenticated".

        Args:
            token: JWT token string (optional)

        Returns:
            Actor if the token is valid, None otherwise
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Actor(user_id=UserId(UUID(payload.user_id)), role=payload.role)
        except (JWTError, ValueError) as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
