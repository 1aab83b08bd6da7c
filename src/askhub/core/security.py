"""Bearer token helpers.

Token issuance belongs to the external identity service; this module only
mints tokens for tests and tooling and decodes the ``sub`` claim of
incoming requests.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from askhub.core.settings import settings


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed access token whose subject is the user id."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        ValueError: If the token is invalid, expired or has no numeric subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise ValueError("Invalid token") from err

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise ValueError("Token has no usable subject")
    return int(subject)
