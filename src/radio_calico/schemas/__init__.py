"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse, MessageResponse
from .rating import IdentityVote, RatingCreate, RatingSummary
from .user import UserCreate, UserResponse

__all__ = [
    "ErrorResponse", "MessageResponse",
    "IdentityVote", "RatingCreate", "RatingSummary",
    "UserCreate", "UserResponse",
]
