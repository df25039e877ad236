"""Error taxonomy shared by the auth core, the store and the HTTP layer.

Every failure the core can report is a ``ChirpyError`` carrying exactly one
``ErrorKind``. The HTTP layer maps kinds to status codes; nothing below it
knows about HTTP.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ChirpyError(Exception):
    """Base class for domain errors."""

    kind = ErrorKind.INTERNAL
    default_message = "Internal server error"
    # Whether the message may be shown to API clients.
    expose_message = False

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def public_message(self) -> str:
        return self.message if self.expose_message else self.default_message


class InvalidInputError(ChirpyError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid input"
    expose_message = True


class UnauthorizedError(ChirpyError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(ChirpyError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"
    expose_message = True


class NotFoundError(ChirpyError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"
    expose_message = True


class ConflictError(ChirpyError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"
    expose_message = True


class InternalError(ChirpyError):
    kind = ErrorKind.INTERNAL


class PasswordMismatchError(UnauthorizedError):
    default_message = "Password does not match"


class InvalidCredentialsError(UnauthorizedError):
    """Login failed; unknown email and wrong password are not told apart."""

    default_message = "Incorrect email or password"


class TokenErrorReason(str, Enum):
    MALFORMED = "malformed"
    SIGNATURE_INVALID = "signature_invalid"
    EXPIRED = "expired"
    SUBJECT_INVALID = "subject_invalid"


class TokenError(UnauthorizedError):
    """Access token failed verification."""

    def __init__(self, reason: TokenErrorReason) -> None:
        super().__init__(f"Access token rejected: {reason.value}")
        self.reason = reason


class RefreshTokenErrorReason(str, Enum):
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    REVOKED = "revoked"


class RefreshTokenError(UnauthorizedError):
    """Refresh token is unknown, expired or revoked."""

    def __init__(self, reason: RefreshTokenErrorReason) -> None:
        super().__init__(f"Refresh token rejected: {reason.value}")
        self.reason = reason


class CredentialErrorReason(str, Enum):
    MISSING_HEADER = "missing_header"
    MALFORMED_HEADER = "malformed_header"


class CredentialError(UnauthorizedError):
    """Authorization header is absent or does not match the expected scheme."""

    def __init__(self, reason: CredentialErrorReason) -> None:
        super().__init__(f"Authorization header rejected: {reason.value}")
        self.reason = reason
