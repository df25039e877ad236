"""Opaque refresh tokens.

Unlike access tokens these carry no claims: a token is valid only if the
store has a row for it that is neither expired nor revoked.
"""
import secrets
from datetime import datetime, timedelta
from typing import NamedTuple

from chirpy.errors import NotFoundError, RefreshTokenError, RefreshTokenErrorReason
from chirpy.services.store import ChirpyStore

REFRESH_TOKEN_BYTES = 32


class IssuedRefreshToken(NamedTuple):
    token: str
    user_id: str
    expires_at: datetime


def generate_refresh_token() -> str:
    """Return 32 random bytes as 64 hex characters."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def issue_refresh_token(
    user_id: str,
    lifetime: timedelta,
    now: datetime | None = None,
) -> IssuedRefreshToken:
    """Generate a token and its expiry; persisting it is up to the caller."""
    issued_at = now or datetime.utcnow()
    return IssuedRefreshToken(
        token=generate_refresh_token(),
        user_id=user_id,
        expires_at=issued_at + lifetime,
    )


def validate_refresh_token(
    token: str,
    store: ChirpyStore,
    now: datetime | None = None,
) -> str:
    """Return the owning user id of a usable refresh token.

    Read-only: validation never changes the stored record.
    """
    try:
        record = store.get_user_by_refresh_token(token)
    except NotFoundError as exc:
        raise RefreshTokenError(RefreshTokenErrorReason.NOT_FOUND) from exc

    if (now or datetime.utcnow()) >= record.expires_at:
        raise RefreshTokenError(RefreshTokenErrorReason.EXPIRED)
    if record.revoked_at is not None:
        raise RefreshTokenError(RefreshTokenErrorReason.REVOKED)
    return record.user_id


def revoke_refresh_token(
    token: str,
    store: ChirpyStore,
    now: datetime | None = None,
) -> None:
    """Soft-delete a refresh token. Revoking twice is not an error."""
    revoked_at = now or datetime.utcnow()
    store.set_refresh_token_revoked(token, revoked_at=revoked_at, updated_at=revoked_at)
