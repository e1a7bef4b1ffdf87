"""Headless listening client: identity, metadata polling and rating calls."""

from .api import ClientError, RatingsClient
from .identity import IdentityCache, collect_traits, generate_identity
from .metadata import RecentTrack, TrackMetadata, song_id_for
from .poller import NowPlayingPoller

__all__ = [
    "ClientError",
    "IdentityCache",
    "NowPlayingPoller",
    "RatingsClient",
    "RecentTrack",
    "TrackMetadata",
    "collect_traits",
    "generate_identity",
    "song_id_for",
]
