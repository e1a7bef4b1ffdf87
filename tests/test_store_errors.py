"""Store failures must reach clients as 500 responses with an error body."""

from unittest.mock import patch

from fastapi import status

from radio_calico.core.errors import StoreError
from radio_calico.services.rating_store import RatingStore


def test_rating_write_failure_returns_500(client) -> None:
    with patch.object(RatingStore, "upsert_rating", side_effect=StoreError("Failed to save rating")):
        r = client.post("/ratings", json={"songId": "abc", "rating": 1, "identity": "u1"})
    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json() == {"error": "Failed to save rating"}


def test_aggregate_failure_returns_500(client) -> None:
    with patch.object(RatingStore, "get_aggregate", side_effect=StoreError("Failed to load ratings")):
        r = client.get("/ratings/abc")
    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json() == {"error": "Failed to load ratings"}


def test_user_listing_failure_returns_500(client) -> None:
    with patch(
        "radio_calico.services.user_service.get_users",
        side_effect=StoreError("Failed to load users"),
    ):
        r = client.get("/users")
    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json() == {"error": "Failed to load users"}
