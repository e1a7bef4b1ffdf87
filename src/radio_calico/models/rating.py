# src/radio_calico/models/rating.py
"""Models capturing listener ratings of songs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import INET
from sqlalchemy.orm import Mapped, mapped_column

from radio_calico.db.session import Base
from radio_calico.db.time import utcnow

# 1 = thumbs up, -1 = thumbs down.
RATING_VALUES = (1, -1)
SONG_ID_MAX_LENGTH = 255
IDENTITY_MAX_LENGTH = 500


class SongRating(Base):
    """One listener's vote on one song.

    Listeners are identified by an opaque client token, so the pair
    (song_id, identity) is unique and later votes overwrite earlier ones.
    """

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("song_id", "identity", name="uq_ratings_song_identity"),
        CheckConstraint("value IN (1, -1)", name="ck_ratings_value"),
        Index("ix_ratings_song_id", "song_id"),
        Index("ix_ratings_identity", "identity"),
        Index("ix_ratings_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    song_id: Mapped[str] = mapped_column(String(SONG_ID_MAX_LENGTH), nullable=False)
    identity: Mapped[str] = mapped_column(String(IDENTITY_MAX_LENGTH), nullable=False)

    # Audit only; never consulted for authorization.
    source_address: Mapped[str | None] = mapped_column(
        String(45).with_variant(INET(), "postgresql"),
        nullable=True,
    )

    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
