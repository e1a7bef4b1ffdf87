"""Parsing of the station's now-playing metadata document."""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_TITLE = "Unknown Track"
UNKNOWN_ALBUM = "Unknown Album"
DEFAULT_SOURCE_QUALITY = "16-bit 44.1kHz"
DEFAULT_STREAM_QUALITY = "48kHz FLAC / HLS Lossless"
RECENT_TRACK_SLOTS = 5

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def song_id_for(title: str, artist: str) -> str:
    """Derive the song identifier shared by every client of the station.

    Not collision resistant; distinct tracks may map to the same id.
    """
    encoded = quote(f"{title}-{artist}", safe=_URI_COMPONENT_SAFE)
    token = base64.b64encode(encoded.encode("ascii")).decode("ascii")
    return _NON_ALNUM.sub("", token)


def _text(payload: Mapping[str, Any], *keys: str, default: str) -> str:
    for key in keys:
        value = payload.get(key)
        if value:
            return str(value)
    return default


@dataclass(frozen=True)
class RecentTrack:
    artist: str
    title: str


@dataclass(frozen=True)
class TrackMetadata:
    """The currently playing track as reported by the metadata endpoint."""

    artist: str = UNKNOWN_ARTIST
    title: str = UNKNOWN_TITLE
    album: str = UNKNOWN_ALBUM
    source_quality: str = DEFAULT_SOURCE_QUALITY
    stream_quality: str = DEFAULT_STREAM_QUALITY
    recent_tracks: tuple[RecentTrack, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TrackMetadata:
        """Build from the raw JSON document; missing or empty fields get defaults."""
        if not isinstance(payload, Mapping):
            raise ValueError("Metadata payload must be a JSON object")

        recent = []
        for slot in range(1, RECENT_TRACK_SLOTS + 1):
            artist = payload.get(f"prev_artist_{slot}")
            title = payload.get(f"prev_title_{slot}")
            if artist and title:
                recent.append(RecentTrack(artist=str(artist), title=str(title)))

        return cls(
            artist=_text(payload, "artist", default=UNKNOWN_ARTIST),
            title=_text(payload, "title", default=UNKNOWN_TITLE),
            album=_text(payload, "album", default=UNKNOWN_ALBUM),
            source_quality=_text(
                payload, "source_quality", "sourceQuality", default=DEFAULT_SOURCE_QUALITY
            ),
            stream_quality=_text(
                payload, "stream_quality", "streamQuality", default=DEFAULT_STREAM_QUALITY
            ),
            recent_tracks=tuple(recent),
        )

    @property
    def song_id(self) -> str:
        return song_id_for(self.title, self.artist)
