"""Bearer token handling.

Tokens are issued by the identity provider and carry the user id in sub.
This service only verifies them; create_access_token exists for local
development and tests, and signs with the same shared secret.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    **claims: Any,
) -> str:
    """Sign a token for user_id (sub) with optional extra claims."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {**claims, "sub": user_id}
    to_encode["exp"] = datetime.now(UTC) + expires_delta
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> str:
    """Verify a bearer token and return its subject (the user id).

    Raises:
        ValueError: If the token is invalid, expired, or has no sub claim.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise ValueError("Token missing required claim: sub")
    return sub
