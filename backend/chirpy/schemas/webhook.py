"""Payment provider webhook schemas."""
from pydantic import BaseModel, Field


class WebhookData(BaseModel):
    user_id: str | None = None


class WebhookEvent(BaseModel):
    """Event delivered by Polka, e.g. ``{"event": "user.upgraded", "data": {"user_id": "..."}}``."""

    event: str
    data: WebhookData = Field(default_factory=WebhookData)
