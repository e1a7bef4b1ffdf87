# src/radio_calico/models/__init__.py
"""SQLAlchemy models for the Radio Calico application."""

from .rating import IDENTITY_MAX_LENGTH, RATING_VALUES, SONG_ID_MAX_LENGTH, SongRating
from .user import User

__all__ = [
    "IDENTITY_MAX_LENGTH",
    "RATING_VALUES",
    "SONG_ID_MAX_LENGTH",
    "SongRating",
    "User",
]
