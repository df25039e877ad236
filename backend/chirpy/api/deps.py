"""Shared API dependencies.

Credential checks live here rather than in route bodies: FastAPI resolves
dependencies before it validates the request body, so a bad credential is
reported as 401 even when the payload is also invalid.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from chirpy.config import Settings, get_settings
from chirpy.database import get_db
from chirpy.models.user import User
from chirpy.services.metrics import HitCounter
from chirpy.services.sessions import SessionService
from chirpy.services.store import ChirpyStore

__all__ = [
    "get_current_user",
    "get_db",
    "get_hit_counter",
    "get_session_service",
    "get_store",
    "verify_polka_key",
]


def get_store(db: Session = Depends(get_db)) -> ChirpyStore:
    """Store bound to the request's database session."""
    return ChirpyStore(db)


def get_session_service(
    store: ChirpyStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> SessionService:
    return SessionService(store, settings)


def get_current_user(
    request: Request,
    service: SessionService = Depends(get_session_service),
) -> User:
    """Get the user behind the bearer access token."""
    return service.current_user(request.headers)


def verify_polka_key(
    request: Request,
    service: SessionService = Depends(get_session_service),
) -> None:
    service.verify_api_key(request.headers)


def get_hit_counter(request: Request) -> HitCounter:
    return request.app.state.hit_counter
