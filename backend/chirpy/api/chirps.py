"""Chirp API endpoints."""
import uuid

from fastapi import APIRouter, Depends, Response, status

from chirpy.api.deps import get_current_user, get_session_service, get_store
from chirpy.models.user import User
from chirpy.schemas.chirp import ChirpCreate, ChirpResponse
from chirpy.services.sessions import SessionService
from chirpy.services.store import ChirpyStore, SortOrder

router = APIRouter(prefix="/chirps", tags=["chirps"])


@router.post("", response_model=ChirpResponse, status_code=status.HTTP_201_CREATED)
def create_chirp(
    chirp_data: ChirpCreate,
    current_user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Post a chirp as the authenticated user."""
    return service.create_chirp(current_user, chirp_data.body)


@router.get("", response_model=list[ChirpResponse])
def list_chirps(
    author_id: uuid.UUID | None = None,
    sort: SortOrder = SortOrder.ASC,
    store: ChirpyStore = Depends(get_store),
):
    """List chirps, optionally for one author, oldest first unless sort=desc."""
    return store.list_chirps(author_id=str(author_id) if author_id else None, sort=sort)


@router.get("/{chirp_id}", response_model=ChirpResponse)
def get_chirp(chirp_id: uuid.UUID, store: ChirpyStore = Depends(get_store)):
    return store.get_chirp_by_id(str(chirp_id))


@router.delete("/{chirp_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chirp(
    chirp_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Delete one of the caller's own chirps."""
    service.delete_chirp(current_user, str(chirp_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
