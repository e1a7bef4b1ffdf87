# src/radio_calico/api/endpoints/ratings.py
"""Song rating endpoints."""

from fastapi import APIRouter, status

from radio_calico.api.dependencies import RatingStoreDep, SourceAddressDep
from radio_calico.schemas.common import ErrorResponse, MessageResponse
from radio_calico.schemas.rating import IdentityVote, RatingCreate, RatingSummary

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
def save_rating(
    rating_data: RatingCreate,
    store: RatingStoreDep,
    source_address: SourceAddressDep,
) -> MessageResponse:
    """Record a vote, replacing any earlier vote from the same identity."""
    store.upsert_rating(
        song_id=rating_data.song_id,
        identity=rating_data.identity,
        source_address=source_address,
        value=rating_data.rating,
    )
    return MessageResponse(message="Rating saved successfully")


@router.get("/{song_id}", response_model=RatingSummary)
def get_song_ratings(song_id: str, store: RatingStoreDep) -> RatingSummary:
    """Return thumbs-up and thumbs-down counts for a song."""
    aggregate = store.get_aggregate(song_id)
    return RatingSummary(
        positive_count=aggregate.positive_count,
        negative_count=aggregate.negative_count,
    )


@router.get("/{song_id}/identity/{identity}", response_model=IdentityVote)
@router.get("/{song_id}/user/{identity}", response_model=IdentityVote, include_in_schema=False)
def get_identity_vote(song_id: str, identity: str, store: RatingStoreDep) -> IdentityVote:
    """Return the vote an identity cast on a song, or null."""
    return IdentityVote(value=store.get_identity_vote(song_id, identity))
