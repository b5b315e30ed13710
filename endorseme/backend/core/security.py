"""
Security Utilities.

Session tokens: a server-side session id wrapped in a signed JWT, handed to
the browser as a cookie (or sent back as a Bearer token by API clients).
The Telegram identity itself is never put in the token.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from endorseme.backend.core.config import get_app_config, get_settings
from endorseme.backend.core.exceptions import NotAuthenticatedError
from endorseme.backend.core.logging import get_logger
from endorseme.backend.core.utils import utc_now

logger = get_logger(__name__)

SESSION_TOKEN_TYPE = "session"


def create_session_token(session_id: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed token for a session id.

    Args:
        session_id: Identifier issued by the SessionStore
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt

    if expires_delta is None:
        expires_delta = timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": session_id,
        "exp": utc_now() + expires_delta,
        "type": SESSION_TOKEN_TYPE,
        "aud": jwt_config.audience,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_session_token(token: str) -> str:
    """
    Decode a session token and return the session id.

    Raises:
        NotAuthenticatedError: If the token is invalid, expired or not a session token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Session token decode failed", extra={"error": str(e)})
        raise NotAuthenticatedError("Invalid or expired session") from e

    session_id = payload.get("sub")
    if payload.get("type") != SESSION_TOKEN_TYPE or not session_id:
        raise NotAuthenticatedError("Invalid or expired session")
    return session_id
