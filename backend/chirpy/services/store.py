"""Persistence for users, chirps and refresh tokens.

The session layer only talks to the database through ``ChirpyStore``. Absent
rows raise ``NotFoundError``, unique violations raise ``ConflictError`` and
any other database failure raises ``InternalError`` after a rollback.
"""
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from enum import Enum

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from chirpy.errors import ConflictError, InternalError, NotFoundError
from chirpy.models.auth import RefreshToken
from chirpy.models.chirp import Chirp
from chirpy.models.user import User

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ChirpyStore:
    """Relational store backed by a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            logger.info(f"Integrity error while trying to {action}: {exc.orig}")
            raise ConflictError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Database error while trying to {action}: {exc}")
            raise InternalError() from exc

    # Users

    def create_user(self, email: str, hashed_password: str) -> User:
        user = User(email=email, hashed_password=hashed_password)
        with self._translate_errors("create user"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def get_user_by_email(self, email: str) -> User:
        with self._translate_errors("load user by email"):
            user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_user_by_id(self, user_id: str) -> User:
        with self._translate_errors("load user"):
            user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_user_credentials(self, user_id: str, email: str, hashed_password: str) -> User:
        user = self.get_user_by_id(user_id)
        with self._translate_errors("update user credentials"):
            user.email = email
            user.hashed_password = hashed_password
            self.db.commit()
            self.db.refresh(user)
        return user

    def upgrade_user_status(self, user_id: str) -> None:
        with self._translate_errors("upgrade user"):
            updated = self.db.query(User).filter(User.id == user_id).update(
                {"is_chirpy_red": True, "updated_at": datetime.utcnow()},
                synchronize_session=False,
            )
            self.db.commit()
        if not updated:
            raise NotFoundError("User not found")

    def delete_all_users(self) -> int:
        """Remove every user together with their chirps and refresh tokens."""
        with self._translate_errors("delete all users"):
            self.db.query(RefreshToken).delete(synchronize_session=False)
            self.db.query(Chirp).delete(synchronize_session=False)
            deleted = self.db.query(User).delete(synchronize_session=False)
            self.db.commit()
        return deleted

    # Chirps

    def create_chirp(self, body: str, user_id: str) -> Chirp:
        chirp = Chirp(body=body, user_id=user_id)
        with self._translate_errors("create chirp"):
            self.db.add(chirp)
            self.db.commit()
            self.db.refresh(chirp)
        return chirp

    def get_chirp_by_id(self, chirp_id: str) -> Chirp:
        with self._translate_errors("load chirp"):
            chirp = self.db.get(Chirp, chirp_id)
        if chirp is None:
            raise NotFoundError("Chirp not found")
        return chirp

    def list_chirps(self, author_id: str | None = None, sort: SortOrder = SortOrder.ASC) -> list[Chirp]:
        query = self.db.query(Chirp)
        if author_id is not None:
            query = query.filter(Chirp.user_id == author_id)
        if sort is SortOrder.DESC:
            query = query.order_by(Chirp.created_at.desc(), Chirp.id.desc())
        else:
            query = query.order_by(Chirp.created_at.asc(), Chirp.id.asc())
        with self._translate_errors("list chirps"):
            return query.all()

    def delete_chirp(self, chirp_id: str) -> None:
        with self._translate_errors("delete chirp"):
            deleted = self.db.query(Chirp).filter(Chirp.id == chirp_id).delete(synchronize_session=False)
            self.db.commit()
        if not deleted:
            raise NotFoundError("Chirp not found")

    # Refresh tokens

    def create_refresh_token(self, token: str, user_id: str, expires_at: datetime) -> RefreshToken:
        record = RefreshToken(token=token, user_id=user_id, expires_at=expires_at)
        with self._translate_errors("create refresh token"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def get_user_by_refresh_token(self, token: str) -> RefreshToken:
        with self._translate_errors("load refresh token"):
            record = self.db.get(RefreshToken, token)
        if record is None:
            raise NotFoundError("Refresh token not found")
        return record

    def set_refresh_token_revoked(self, token: str, revoked_at: datetime, updated_at: datetime) -> None:
        """Revoke in one conditional UPDATE; an earlier revocation time is kept."""
        with self._translate_errors("revoke refresh token"):
            updated = self.db.query(RefreshToken).filter(RefreshToken.token == token).update(
                {
                    "revoked_at": func.coalesce(RefreshToken.revoked_at, revoked_at),
                    "updated_at": updated_at,
                },
                synchronize_session=False,
            )
            self.db.commit()
        if not updated:
            raise NotFoundError("Refresh token not found")
