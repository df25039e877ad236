"""Password hashing with bcrypt."""
from functools import lru_cache

import bcrypt

from chirpy.config import get_settings
from chirpy.errors import InvalidInputError, PasswordMismatchError

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if not encoded:
        raise InvalidInputError("Password must not be empty")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return encoded


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a fresh salt and the configured bcrypt cost."""
    encoded = _encode_password(password)
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> None:
    """Verify a password against its hash.

    Raises PasswordMismatchError for a wrong password as well as for a
    malformed or unsupported hash, without saying which.
    """
    matched = False
    if hashed_password:
        try:
            matched = bcrypt.checkpw(_encode_password(password), hashed_password.encode("utf-8"))
        except (InvalidInputError, ValueError):
            matched = False
    if not matched:
        raise PasswordMismatchError()


@lru_cache
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"chirpy-no-such-user", bcrypt.gensalt(rounds=rounds))


def check_dummy_password(password: str) -> None:
    """Spend one bcrypt check on a throwaway hash and ignore the result.

    Used when there is no stored hash to compare against, so that an unknown
    account costs as much time as a wrong password.
    """
    encoded = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    bcrypt.checkpw(encoded, _dummy_hash(get_settings().bcrypt_rounds))
