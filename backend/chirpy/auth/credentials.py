"""Authorization header parsing.

User sessions present ``Authorization: Bearer <token>``; the payment
provider presents ``Authorization: ApiKey <key>``. Both go through the same
parser, and the typed result keeps the two trust domains apart.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from chirpy.errors import CredentialError, CredentialErrorReason


class AuthScheme(str, Enum):
    BEARER = "Bearer"
    API_KEY = "ApiKey"


@dataclass(frozen=True)
class BearerCredential:
    token: str


@dataclass(frozen=True)
class ApiKeyCredential:
    key: str


Credential = BearerCredential | ApiKeyCredential


def _authorization_header(headers: Mapping[str, str]) -> str | None:
    # Starlette headers are case-insensitive; plain dicts are not.
    value = headers.get("Authorization")
    if value is None:
        value = headers.get("authorization")
    return value


def parse_authorization(headers: Mapping[str, str], scheme: AuthScheme) -> Credential:
    """Parse the Authorization header for the expected scheme."""
    value = _authorization_header(headers)
    if not value:
        raise CredentialError(CredentialErrorReason.MISSING_HEADER)

    prefix = f"{scheme.value} "
    if not value.startswith(prefix):
        raise CredentialError(CredentialErrorReason.MALFORMED_HEADER)

    secret = value[len(prefix):].strip()
    if not secret:
        raise CredentialError(CredentialErrorReason.MALFORMED_HEADER)

    if scheme is AuthScheme.BEARER:
        return BearerCredential(token=secret)
    return ApiKeyCredential(key=secret)


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Extract the token from ``Authorization: Bearer <token>``."""
    return parse_authorization(headers, AuthScheme.BEARER).token


def get_api_key(headers: Mapping[str, str]) -> str:
    """Extract the key from ``Authorization: ApiKey <key>``."""
    return parse_authorization(headers, AuthScheme.API_KEY).key
