"""Bearer token verification.

Tokens are issued by the identity provider with a shared HS256 secret. The
only claim this service relies on is ``sub``, the user ID; roles are looked up
in the database on every request.
"""

from datetime import timedelta
from uuid import UUID

from jose import JWTError, jwt

from app.config import settings
from app.core.clock import utc_now

TOKEN_TYPE = "access"


class InvalidTokenError(Exception):
    """Token is malformed, expired, or carries no usable subject."""


def issue_token(user_id: UUID, expires_delta: timedelta = timedelta(minutes=30)) -> str:
    """
    Sign a token for a user.

    Production tokens come from the identity provider; this is used by the
    demo seeding script and the test suite.

    Args:
        user_id: Subject of the token
        expires_delta: Lifetime of the token

    Returns:
        Encoded JWT
    """
    issued_at = utc_now()
    claims = {
        "sub": str(user_id),
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> UUID:
    """
    Verify a token and return the user ID it was issued for.

    Raises:
        InvalidTokenError: If the signature, expiry, type or subject is invalid
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError("Could not validate credentials") from e

    if claims.get("type") != TOKEN_TYPE:
        raise InvalidTokenError("Unexpected token type")

    subject = claims.get("sub")
    if not isinstance(subject, str):
        raise InvalidTokenError("Token has no subject")

    try:
        return UUID(subject)
    except ValueError as e:
        raise InvalidTokenError("Invalid user ID format") from e
