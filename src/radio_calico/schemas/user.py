"""User-related Pydantic schemas."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class UserCreate(BaseModel):
    """Registration payload."""

    username: StrictStr = Field(..., min_length=1, max_length=255)
    email: StrictStr = Field(..., min_length=1, max_length=255)


class UserResponse(BaseModel):
    """User record as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime.datetime
