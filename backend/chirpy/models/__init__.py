"""SQLAlchemy models package."""
from chirpy.models.user import User
from chirpy.models.chirp import Chirp
from chirpy.models.auth import RefreshToken

__all__ = [
    "User",
    "Chirp",
    "RefreshToken",
]
