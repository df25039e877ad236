"""User account endpoints."""
from fastapi import APIRouter, Depends, status

from chirpy.api.deps import get_current_user, get_session_service
from chirpy.models.user import User
from chirpy.schemas.auth import UserCredentials, UserResponse
from chirpy.services.sessions import SessionService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    credentials: UserCredentials,
    service: SessionService = Depends(get_session_service),
):
    """Register a new user."""
    return service.register(credentials.email, credentials.password)


@router.put("", response_model=UserResponse)
def update_credentials(
    credentials: UserCredentials,
    current_user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Change the caller's email and password."""
    return service.update_credentials(current_user, credentials.email, credentials.password)
