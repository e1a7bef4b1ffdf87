"""Tests for the rating store: upsert, aggregation and validation."""

from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from radio_calico.core.errors import StoreError, ValidationError
from radio_calico.models import SongRating
from radio_calico.services.rating_store import RatingAggregate, RatingStore

from tests.conftest import count_ratings


@pytest.fixture(params=[True, False], ids=["native", "savepoint"])
def store(request, db_session) -> RatingStore:
    """Exercise both the ON CONFLICT path and the insert-then-update path."""
    return RatingStore(db_session, native_upsert=request.param)


def test_first_vote_inserts_row(store, db_session) -> None:
    store.upsert_rating("song-1", "listener-a", "198.51.100.4", 1)

    row = db_session.scalars(select(SongRating)).one()
    assert row.song_id == "song-1"
    assert row.identity == "listener-a"
    assert row.source_address == "198.51.100.4"
    assert row.value == 1
    assert row.created_at is not None


def test_second_vote_replaces_first(store, db_session) -> None:
    store.upsert_rating("song-1", "listener-a", "198.51.100.4", 1)
    first = db_session.scalars(select(SongRating)).one()
    first_written = first.created_at
    db_session.expire_all()

    store.upsert_rating("song-1", "listener-a", "203.0.113.9", -1)
    db_session.expire_all()

    row = db_session.scalars(select(SongRating)).one()
    assert row.value == -1
    assert row.source_address == "203.0.113.9"
    assert row.created_at >= first_written
    assert count_ratings(db_session) == 1
    assert store.get_aggregate("song-1") == RatingAggregate(positive_count=0, negative_count=1)


def test_repeated_identical_vote_is_idempotent(store) -> None:
    store.upsert_rating("song-1", "listener-a", None, 1)
    before = store.get_aggregate("song-1")

    store.upsert_rating("song-1", "listener-a", None, 1)

    assert store.get_aggregate("song-1") == before == RatingAggregate(1, 0)


def test_aggregate_counts_each_identity_once(store) -> None:
    store.upsert_rating("song-1", "listener-a", None, 1)
    store.upsert_rating("song-1", "listener-b", None, 1)
    store.upsert_rating("song-1", "listener-c", None, -1)
    store.upsert_rating("song-2", "listener-a", None, -1)

    assert store.get_aggregate("song-1") == RatingAggregate(positive_count=2, negative_count=1)
    assert store.get_aggregate("song-2") == RatingAggregate(positive_count=0, negative_count=1)


def test_unknown_song_aggregates_to_zero(store) -> None:
    assert store.get_aggregate("never-played") == RatingAggregate(0, 0)


def test_identity_vote_present_and_absent(store) -> None:
    store.upsert_rating("song-1", "listener-a", None, -1)

    assert store.get_identity_vote("song-1", "listener-a") == -1
    assert store.get_identity_vote("song-1", "listener-b") is None
    assert store.get_identity_vote("song-2", "listener-a") is None


@pytest.mark.parametrize("value", [0, 2, -2, "1", 1.0, True, None])
def test_out_of_domain_values_are_rejected(store, db_session, value) -> None:
    with pytest.raises(ValidationError):
        store.upsert_rating("song-1", "listener-a", None, value)
    assert count_ratings(db_session) == 0


def test_rejected_vote_leaves_existing_row_untouched(store) -> None:
    store.upsert_rating("song-1", "listener-a", None, 1)

    with pytest.raises(ValidationError):
        store.upsert_rating("song-1", "listener-a", None, 0)

    assert store.get_identity_vote("song-1", "listener-a") == 1


@pytest.mark.parametrize(
    ("song_id", "identity"),
    [("", "listener-a"), ("song-1", ""), (None, "listener-a"), ("song-1", None)],
)
def test_missing_identifiers_are_rejected(store, song_id, identity) -> None:
    with pytest.raises(ValidationError):
        store.upsert_rating(song_id, identity, None, 1)


@pytest.mark.parametrize(
    ("song_id", "identity"),
    [("s" * 256, "listener-a"), ("song-1", "i" * 501)],
)
def test_overlong_identifiers_are_rejected(store, db_session, song_id, identity) -> None:
    with pytest.raises(ValidationError, match="at most"):
        store.upsert_rating(song_id, identity, None, 1)
    assert count_ratings(db_session) == 0


def test_storage_failure_surfaces_as_store_error(db_session) -> None:
    store = RatingStore(db_session)
    failure = OperationalError("INSERT", {}, Exception("disk I/O error"))

    with patch.object(db_session, "execute", side_effect=failure):
        with pytest.raises(StoreError):
            store.upsert_rating("song-1", "listener-a", None, 1)
        with pytest.raises(StoreError):
            store.get_aggregate("song-1")
