"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, Request, Response, status

from chirpy.api.deps import get_session_service
from chirpy.schemas.auth import LoginResponse, Token, UserLogin, UserResponse
from chirpy.services.sessions import SessionService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    user_data: UserLogin,
    service: SessionService = Depends(get_session_service),
):
    """Login and get tokens."""
    result = service.login(user_data.email, user_data.password, user_data.expires_in_seconds)
    user = UserResponse.model_validate(result.user)
    return LoginResponse(
        **user.model_dump(),
        token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post("/refresh", response_model=Token)
def refresh_token(
    request: Request,
    service: SessionService = Depends(get_session_service),
):
    """Exchange the bearer refresh token for a new access token."""
    return Token(token=service.refresh(request.headers))


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
def revoke_token(
    request: Request,
    service: SessionService = Depends(get_session_service),
):
    """Revoke the bearer refresh token."""
    service.revoke(request.headers)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
