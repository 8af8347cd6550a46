"""
Security Utilities.

Bearer-token verification for the external identity provider.

Tokens are issued elsewhere; this service only verifies the signature,
expiry, and audience, then reads the subject claim as the owner id.
create_access_token exists for local tooling and tests.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from notevault.core.config import get_app_config, get_settings
from notevault.core.exceptions import AuthenticationError
from notevault.core.logging import get_logger
from notevault.core.utils import utc_now

logger = get_logger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Payload data to encode (must include "sub")
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access", "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")


def owner_id_from_token(token: str) -> str:
    """
    Resolve the owner id carried by an access token.

    Raises:
        AuthenticationError: If the token is invalid or has no subject
    """
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise AuthenticationError("Token has no subject")
    return subject
