"""Bearer token helpers.

Accounts are managed by the external auth provider; this service only needs
to issue (for tests and tooling) and decode the signed token naming the
account.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from quoteboard.core.settings import settings

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 30


def create_access_token(account_id: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT access token whose subject is the account id."""
    to_encode: dict[str, object] = {"sub": account_id}
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_account_id(token: str) -> str | None:
    """Return the account id carried by a token, or None if it is invalid."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None
