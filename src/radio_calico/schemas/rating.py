# src/radio_calico/schemas/rating.py
"""Rating-related Pydantic schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from radio_calico.models.rating import IDENTITY_MAX_LENGTH, RATING_VALUES, SONG_ID_MAX_LENGTH


class RatingCreate(BaseModel):
    """Schema for submitting a vote on a song."""

    song_id: StrictStr = Field(
        ...,
        min_length=1,
        max_length=SONG_ID_MAX_LENGTH,
        validation_alias=AliasChoices("songId", "song_id"),
        description="Opaque song identifier derived by the client",
    )
    rating: StrictInt = Field(..., description="1 for thumbs up, -1 for thumbs down")
    identity: StrictStr = Field(
        ...,
        min_length=1,
        max_length=IDENTITY_MAX_LENGTH,
        validation_alias=AliasChoices("identity", "userFingerprint"),
        description="Opaque client-generated identity token",
    )

    @field_validator("rating")
    @classmethod
    def _rating_in_domain(cls, value: int) -> int:
        if value not in RATING_VALUES:
            raise ValueError("rating must be 1 or -1")
        return value


class RatingSummary(BaseModel):
    """Positive and negative vote counts for one song."""

    model_config = ConfigDict(populate_by_name=True)

    positive_count: int = Field(0, alias="positiveCount")
    negative_count: int = Field(0, alias="negativeCount")


class IdentityVote(BaseModel):
    """The vote a given identity cast on a song, if any."""

    value: int | None = Field(None, description="1, -1, or null when no vote exists")
