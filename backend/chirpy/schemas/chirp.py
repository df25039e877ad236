"""Chirp schemas."""
from datetime import datetime

from pydantic import BaseModel


class ChirpCreate(BaseModel):
    """Request to post a chirp."""

    body: str


class ChirpResponse(BaseModel):
    """A chirp as returned by the API."""

    id: str
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: str

    class Config:
        from_attributes = True
