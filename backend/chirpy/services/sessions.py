"""Session orchestration: registration, login, token refresh/revocation and
the authorization checks in front of every mutating operation.

A session moves from anonymous to authenticated at login (access + refresh
token issued). Once the access token expires the refresh token can mint a
new one until it expires or is revoked; revocation is terminal.
"""
import hmac
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from chirpy.auth.credentials import get_api_key, get_bearer_token
from chirpy.auth.passwords import check_dummy_password, hash_password, verify_password
from chirpy.auth.refresh_tokens import (
    issue_refresh_token,
    revoke_refresh_token,
    validate_refresh_token,
)
from chirpy.auth.tokens import create_access_token, verify_access_token
from chirpy.config import Settings
from chirpy.errors import (
    CredentialError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
    PasswordMismatchError,
    RefreshTokenError,
    TokenError,
    UnauthorizedError,
)
from chirpy.models.chirp import Chirp
from chirpy.models.user import User
from chirpy.services.chirp_filter import prepare_chirp_body
from chirpy.services.store import ChirpyStore

logger = logging.getLogger(__name__)

UPGRADE_USER_EVENT = "user.upgraded"


@dataclass
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


class SessionService:
    """Composes hashing, token signing and refresh tokens into the auth flows."""

    def __init__(self, store: ChirpyStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    def _access_lifetime(self, expires_in_seconds: int | None) -> timedelta:
        seconds = self.settings.access_token_expire_seconds
        if expires_in_seconds is not None and expires_in_seconds > 0:
            seconds = expires_in_seconds
        return timedelta(seconds=min(seconds, self.settings.access_token_max_expire_seconds))

    def _issue_access_token(self, user_id: str, expires_in_seconds: int | None = None) -> str:
        return create_access_token(
            user_id,
            self.settings.secret_key,
            self._access_lifetime(expires_in_seconds),
            algorithm=self.settings.algorithm,
        )

    def register(self, email: str, password: str) -> User:
        """Create a user; raises ConflictError if the email is taken."""
        hashed_password = hash_password(password)
        user = self.store.create_user(email=email, hashed_password=hashed_password)
        logger.info(f"Registered user {user.id}")
        return user

    def login(self, email: str, password: str, expires_in_seconds: int | None = None) -> LoginResult:
        # Unknown email and wrong password look the same to the caller,
        # in the response and in the time it takes.
        try:
            user = self.store.get_user_by_email(email)
        except NotFoundError as exc:
            check_dummy_password(password)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError() from exc
        try:
            verify_password(password, user.hashed_password)
        except PasswordMismatchError as exc:
            logger.warning(f"Login failed for user {user.id}: password mismatch")
            raise InvalidCredentialsError() from exc

        access_token = self._issue_access_token(user.id, expires_in_seconds)
        issued = issue_refresh_token(
            user.id,
            timedelta(days=self.settings.refresh_token_expire_days),
        )
        self.store.create_refresh_token(issued.token, issued.user_id, issued.expires_at)
        logger.info(f"User {user.id} logged in")
        return LoginResult(user=user, access_token=access_token, refresh_token=issued.token)

    def refresh(self, headers: Mapping[str, str]) -> str:
        """Mint a new access token from a refresh token. The refresh token is not rotated."""
        try:
            refresh_token = get_bearer_token(headers)
            user_id = validate_refresh_token(refresh_token, self.store)
        except (CredentialError, RefreshTokenError) as exc:
            logger.warning(f"Refresh rejected: {exc.reason.value}")
            raise UnauthorizedError() from exc
        return self._issue_access_token(user_id)

    def revoke(self, headers: Mapping[str, str]) -> None:
        try:
            refresh_token = get_bearer_token(headers)
            record = self.store.get_user_by_refresh_token(refresh_token)
        except CredentialError as exc:
            logger.warning(f"Revoke rejected: {exc.reason.value}")
            raise UnauthorizedError() from exc
        except NotFoundError as exc:
            logger.warning("Revoke rejected: unknown refresh token")
            raise UnauthorizedError() from exc

        revoke_refresh_token(record.token, self.store)
        logger.info(f"Revoked a refresh token of user {record.user_id}")

    def authenticate(self, headers: Mapping[str, str]) -> str:
        """Return the user id proven by the bearer access token."""
        try:
            return verify_access_token(
                get_bearer_token(headers),
                self.settings.secret_key,
                algorithm=self.settings.algorithm,
            )
        except (CredentialError, TokenError) as exc:
            logger.warning(f"Authentication failed: {exc.reason.value}")
            raise UnauthorizedError() from exc

    def current_user(self, headers: Mapping[str, str]) -> User:
        """Authenticate and load the caller.

        A valid token whose user has since been deleted is rejected like any
        other bad credential.
        """
        user_id = self.authenticate(headers)
        try:
            return self.store.get_user_by_id(user_id)
        except NotFoundError as exc:
            logger.warning(f"Authentication failed: user {user_id} no longer exists")
            raise UnauthorizedError() from exc

    def verify_api_key(self, headers: Mapping[str, str]) -> None:
        """Check the payment provider's ``ApiKey`` against POLKA_KEY."""
        try:
            api_key = get_api_key(headers)
        except CredentialError as exc:
            logger.warning(f"Webhook rejected: {exc.reason.value}")
            raise UnauthorizedError() from exc
        if not hmac.compare_digest(api_key.encode("utf-8"), self.settings.polka_key.encode("utf-8")):
            logger.warning("Webhook rejected: API key mismatch")
            raise UnauthorizedError()

    def update_credentials(self, user: User, email: str, password: str) -> User:
        hashed_password = hash_password(password)
        try:
            return self.store.update_user_credentials(user.id, email=email, hashed_password=hashed_password)
        except NotFoundError as exc:
            raise UnauthorizedError() from exc

    def create_chirp(self, user: User, body: str) -> Chirp:
        return self.store.create_chirp(body=prepare_chirp_body(body), user_id=user.id)

    def delete_chirp(self, user: User, chirp_id: str) -> None:
        """Delete a chirp owned by ``user``.

        The caller is already authenticated; the lookup comes next, then the
        ownership check, and the store is only mutated once both pass.
        """
        chirp = self.store.get_chirp_by_id(chirp_id)
        if chirp.user_id != user.id:
            logger.warning(f"User {user.id} tried to delete chirp {chirp_id} owned by someone else")
            raise ForbiddenError("You can only delete your own chirps")
        self.store.delete_chirp(chirp.id)

    def upgrade_user(self, event: str, user_id: str | None) -> bool:
        """Handle a payment provider event whose API key was already verified.

        Returns False for events that are acknowledged but ignored.
        """
        if event != UPGRADE_USER_EVENT:
            logger.info(f"Ignoring webhook event {event!r}")
            return False

        try:
            user_uuid = uuid.UUID(str(user_id))
        except ValueError as exc:
            raise InvalidInputError("Invalid user id") from exc
        self.store.upgrade_user_status(str(user_uuid))
        logger.info(f"Upgraded user {user_uuid} to Chirpy Red")
        return True
