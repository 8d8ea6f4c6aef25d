"""Bearer-token authentication and role checks for routes."""

from typing import Annotated

from fastapi import Depends, Header

from app.dependencies import Authority
from app.exceptions import ForbiddenError, UnauthorizedError
from app.models.user import Identity, UserRole


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise UnauthorizedError("Authorization header missing")
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if not token or scheme.lower() != "bearer":
        raise UnauthorizedError("Token missing")
    return token


async def get_current_user(
    authority: Authority,
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Resolve the caller's identity from the bearer token.

    Missing header or token answers 401; a bad or expired token answers 403.
    The identity is the snapshot embedded in the token, not a directory read.
    """
    token = extract_bearer_token(authorization)
    return authority.verify_token(token)


CurrentUser = Annotated[Identity, Depends(get_current_user)]


def require_role(*roles: UserRole | str):
    """Dependency factory that only lets the given roles through."""

    async def _check(current_user: CurrentUser, authority: Authority) -> Identity:
        if not authority.authorize(current_user, roles):
            raise ForbiddenError()
        return current_user

    return _check
