"""Request identity helpers shared by routes."""

from fastapi import Cookie, Header, HTTPException, Request, status

from discuss.domain.service import JWTService
from discuss.domain.value import Actor, RequestOrigin


def read_token(
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> str | None:
    """Read the identity token from the Authorization header or cookie.

    The ``Bearer`` header wins when both are present.
    """
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return auth_token


def require_actor(jwt_service: JWTService, token: str | None, action: str) -> Actor:
    """Resolve the acting identity or reject the request with 401.

    Args:
        jwt_service: Token verifier
        token: Raw token from read_token
        action: Human readable action for the error message

    Raises:
        HTTPException: If the token is missing, invalid or expired
    """
    actor = jwt_service.get_actor_from_token(token)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return actor


def request_origin(request: Request) -> RequestOrigin:
    """Client address and user agent for the activity log."""
    return RequestOrigin(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
