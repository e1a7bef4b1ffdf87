"""Async HTTP client for the rating API."""

from __future__ import annotations

import logging
from types import TracebackType
from urllib.parse import quote

import httpx

from radio_calico.schemas.rating import IdentityVote, RatingSummary

logger = logging.getLogger(__name__)


class ClientError(RuntimeError):
    """Raised when the rating API answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _segment(value: str) -> str:
    return quote(value, safe="")


class RatingsClient:
    """Submit and read song ratings on behalf of one listener."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> RatingsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: object) -> httpx.Response:
        response = await self._client.request(method, path, **kwargs)
        if response.is_success:
            return response
        try:
            body = response.json()
        except ValueError:
            body = None
        message = (body.get("error") if isinstance(body, dict) else None) or response.text
        logger.warning("%s %s failed with %d: %s", method, path, response.status_code, message)
        raise ClientError(response.status_code, message)

    async def submit_rating(self, song_id: str, identity: str, rating: int) -> str:
        """Vote on a song; returns the server's confirmation message."""
        response = await self._request(
            "POST",
            "/ratings",
            json={"songId": song_id, "rating": rating, "identity": identity},
        )
        return response.json()["message"]

    async def get_summary(self, song_id: str) -> RatingSummary:
        response = await self._request("GET", f"/ratings/{_segment(song_id)}")
        return RatingSummary.model_validate(response.json())

    async def get_identity_vote(self, song_id: str, identity: str) -> int | None:
        response = await self._request(
            "GET", f"/ratings/{_segment(song_id)}/identity/{_segment(identity)}"
        )
        return IdentityVote.model_validate(response.json()).value
