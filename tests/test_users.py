"""Tests for user registration endpoints."""

from fastapi import status

from tests.conftest import count_users


def _create(client, username="alice", email="alice@example.com"):
    return client.post("/users", json={"username": username, "email": email})


def test_create_and_fetch_user(client) -> None:
    r = _create(client)
    assert r.status_code == status.HTTP_201_CREATED
    created = r.json()
    assert created["username"] == "alice"
    assert created["email"] == "alice@example.com"
    assert isinstance(created["id"], int)
    assert created["created_at"]

    r = client.get(f"/users/{created['id']}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == created


def test_list_users_newest_first(client) -> None:
    assert client.get("/users").json() == []

    first = _create(client, "alice", "alice@example.com").json()
    second = _create(client, "bob", "bob@example.com").json()

    r = client.get("/users")
    assert r.status_code == status.HTTP_200_OK
    assert [user["id"] for user in r.json()] == [second["id"], first["id"]]


def test_duplicate_username_or_email_is_rejected(client, db_session) -> None:
    assert _create(client).status_code == status.HTTP_201_CREATED

    r = _create(client, "alice", "other@example.com")
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {"error": "Username or email already exists"}

    r = _create(client, "alice2", "alice@example.com")
    assert r.status_code == status.HTTP_400_BAD_REQUEST

    assert count_users(db_session) == 1


def test_missing_fields_are_rejected(client, db_session) -> None:
    r = client.post("/users", json={"username": "alice"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert "email" in r.json()["error"]

    r = client.post("/users", json={"username": "", "email": "alice@example.com"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST

    assert count_users(db_session) == 0


def test_get_missing_user_returns_404(client) -> None:
    r = client.get("/users/9999")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"error": "User not found"}


def test_delete_user(client) -> None:
    user_id = _create(client).json()["id"]

    r = client.delete(f"/users/{user_id}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"message": "User deleted successfully"}

    assert client.get(f"/users/{user_id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(f"/users/{user_id}").status_code == status.HTTP_404_NOT_FOUND


def test_delete_missing_user_returns_404(client) -> None:
    r = client.delete("/users/424242")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"error": "User not found"}
