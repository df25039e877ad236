"""Payment provider webhooks."""
from fastapi import APIRouter, Depends, Response, status

from chirpy.api.deps import get_session_service, verify_polka_key
from chirpy.schemas.webhook import WebhookEvent
from chirpy.services.sessions import SessionService

router = APIRouter(prefix="/polka", tags=["webhooks"])


@router.post(
    "/webhooks",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_polka_key)],
)
def handle_polka_event(
    payload: WebhookEvent,
    service: SessionService = Depends(get_session_service),
):
    """Upgrade a user to Chirpy Red; other events are acknowledged and ignored."""
    service.upgrade_user(payload.event, payload.data.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
