"""Persistence of song ratings: one vote per (song, identity) pair."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import case, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from radio_calico.core.errors import StoreError, ValidationError
from radio_calico.db.time import utcnow
from radio_calico.models.rating import (
    IDENTITY_MAX_LENGTH,
    RATING_VALUES,
    SONG_ID_MAX_LENGTH,
    SongRating,
)

__all__ = ["RatingAggregate", "RatingStore", "validate_rating"]

logger = logging.getLogger(__name__)

# Dialects with an atomic INSERT ... ON CONFLICT DO UPDATE.
_NATIVE_UPSERT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

_CONFLICT_COLUMNS = ("song_id", "identity")
_REPLACED_COLUMNS = ("value", "source_address", "created_at")


@dataclass(frozen=True)
class RatingAggregate:
    """Vote counts for a single song."""

    positive_count: int = 0
    negative_count: int = 0


def validate_rating(song_id: Any, identity: Any, value: Any) -> None:
    """Reject votes that must never reach storage.

    Raises:
        ValidationError: If an identifier is missing, empty or longer than its
            column, or the value is anything other than the integers 1 or -1.
    """
    if not isinstance(song_id, str) or not song_id:
        raise ValidationError("songId is required")
    if len(song_id) > SONG_ID_MAX_LENGTH:
        raise ValidationError(f"songId must be at most {SONG_ID_MAX_LENGTH} characters")
    if not isinstance(identity, str) or not identity:
        raise ValidationError("identity is required")
    if len(identity) > IDENTITY_MAX_LENGTH:
        raise ValidationError(f"identity must be at most {IDENTITY_MAX_LENGTH} characters")
    if isinstance(value, bool) or not isinstance(value, int) or value not in RATING_VALUES:
        raise ValidationError("rating must be 1 or -1")


class RatingStore:
    """Thin wrapper around database access for song ratings."""

    def __init__(self, session: Session, *, native_upsert: bool = True) -> None:
        """Initialize the store with a SQLAlchemy session.

        Args:
            session: Session the store reads and writes through.
            native_upsert: Use the dialect's ON CONFLICT clause when it has one.
                When False, or for dialects without one, a savepoint-guarded
                insert followed by an update is used instead.
        """
        self.session = session
        self.native_upsert = native_upsert

    def upsert_rating(
        self,
        song_id: str,
        identity: str,
        source_address: str | None,
        value: int,
    ) -> None:
        """Record a vote, replacing any earlier vote from the same identity.

        The write is a single atomic statement where the dialect supports it,
        so concurrent readers always see either the old or the new row.

        Raises:
            ValidationError: If the input is out of domain; nothing is written.
            StoreError: If the database rejects or fails the write.
        """
        validate_rating(song_id, identity, value)
        row = {
            "song_id": song_id,
            "identity": identity,
            "source_address": source_address,
            "value": value,
            "created_at": utcnow(),
        }
        try:
            dialect = self.session.get_bind().dialect.name
            if self.native_upsert and dialect in _NATIVE_UPSERT:
                self._native_upsert(dialect, row)
            else:
                self._insert_or_update(row)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to save rating for song %s", song_id)
            raise StoreError("Failed to save rating") from exc

    def _native_upsert(self, dialect: str, row: dict[str, Any]) -> None:
        stmt = _NATIVE_UPSERT[dialect](SongRating.__table__).values(**row)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(_CONFLICT_COLUMNS),
            set_={column: stmt.excluded[column] for column in _REPLACED_COLUMNS},
        )
        self.session.execute(stmt)

    def _insert_or_update(self, row: dict[str, Any]) -> None:
        # Both branches run inside the caller's transaction, so the row is
        # never absent between the failed insert and the update.
        try:
            with self.session.begin_nested():
                self.session.execute(insert(SongRating.__table__).values(**row))
        except IntegrityError:
            self.session.execute(
                update(SongRating.__table__)
                .where(
                    SongRating.song_id == row["song_id"],
                    SongRating.identity == row["identity"],
                )
                .values({column: row[column] for column in _REPLACED_COLUMNS})
            )

    def get_aggregate(self, song_id: str) -> RatingAggregate:
        """Return thumbs-up and thumbs-down counts; zeros for unknown songs."""
        stmt = select(
            func.count(case((SongRating.value == 1, 1))),
            func.count(case((SongRating.value == -1, 1))),
        ).where(SongRating.song_id == song_id)
        try:
            positive, negative = self.session.execute(stmt).one()
        except SQLAlchemyError as exc:
            logger.exception("Failed to aggregate ratings for song %s", song_id)
            raise StoreError("Failed to load ratings") from exc
        return RatingAggregate(positive_count=int(positive or 0), negative_count=int(negative or 0))

    def get_identity_vote(self, song_id: str, identity: str) -> int | None:
        """Return the stored vote for the pair, or None when there is none."""
        stmt = select(SongRating.value).where(
            SongRating.song_id == song_id,
            SongRating.identity == identity,
        )
        try:
            return self.session.scalar(stmt)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load vote for song %s", song_id)
            raise StoreError("Failed to load rating") from exc
