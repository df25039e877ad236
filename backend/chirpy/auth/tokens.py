"""Signed access tokens (JWT, HMAC).

Access tokens are stateless: they are never stored and cannot be revoked
individually, so ``exp`` is the only kill switch. Expiry is an exact boundary
with no leeway, which is fine for a single-node deployment. Claims hold whole
seconds: ``iat`` is rounded down and ``exp`` up, so a token is never shorter
lived than requested.
"""
import uuid
from calendar import timegm
from datetime import datetime, timedelta

from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError

from chirpy.errors import TokenError, TokenErrorReason

TOKEN_ISSUER = "chirpy"
DEFAULT_ALGORITHM = "HS256"


def _epoch(moment: datetime, round_up: bool = False) -> int:
    seconds = timegm(moment.utctimetuple())
    if round_up and moment.microsecond:
        seconds += 1
    return seconds


def create_access_token(
    user_id: str | uuid.UUID,
    secret: str,
    expires_in: timedelta,
    now: datetime | None = None,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Create a JWT access token for a user."""
    issued_at = now or datetime.utcnow()
    claims = {
        "iss": TOKEN_ISSUER,
        "iat": _epoch(issued_at),
        # exp never lands before issued_at + expires_in
        "exp": _epoch(issued_at + expires_in, round_up=True),
        "sub": str(user_id),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def verify_access_token(
    token: str,
    secret: str,
    now: datetime | None = None,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Verify an access token and return the user id it was issued for."""
    if not token or token.count(".") != 2:
        raise TokenError(TokenErrorReason.MALFORMED)

    try:
        jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise TokenError(TokenErrorReason.MALFORMED) from exc

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            issuer=TOKEN_ISSUER,
            # exp is checked below against our own clock, without leeway
            options={"verify_exp": False, "verify_aud": False},
        )
    except JWTClaimsError as exc:
        raise TokenError(TokenErrorReason.MALFORMED) from exc
    except JWTError as exc:
        raise TokenError(TokenErrorReason.SIGNATURE_INVALID) from exc

    expires_at = claims.get("exp")
    if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
        raise TokenError(TokenErrorReason.MALFORMED)
    if _epoch(now or datetime.utcnow()) >= expires_at:
        raise TokenError(TokenErrorReason.EXPIRED)

    try:
        user_id = uuid.UUID(str(claims.get("sub")))
    except ValueError as exc:
        raise TokenError(TokenErrorReason.SUBJECT_INVALID) from exc
    return str(user_id)
