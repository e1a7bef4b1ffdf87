"""Background polling of the station's now-playing metadata."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from radio_calico.client.api import ClientError
from radio_calico.client.metadata import TrackMetadata

logger = logging.getLogger(__name__)

TrackCallback = Callable[[TrackMetadata], Awaitable[None]]


class NowPlayingPoller:
    """Periodically fetches metadata and reports track changes.

    The callback runs only when the derived song id differs from the last
    one seen, so a long track triggers it once.
    """

    def __init__(
        self,
        metadata_url: str,
        on_track_change: TrackCallback,
        *,
        interval: float = 30.0,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.metadata_url = metadata_url
        self.on_track_change = on_track_change
        self.interval = max(0.1, float(interval))
        self.current_track: TrackMetadata | None = None
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def current_song_id(self) -> str | None:
        return self.current_track.song_id if self.current_track else None

    async def fetch_once(self) -> TrackMetadata | None:
        """Fetch and parse the metadata document; None when unavailable."""
        try:
            response = await self._client.get(self.metadata_url)
            response.raise_for_status()
            return TrackMetadata.from_payload(response.json())
        except httpx.HTTPError as exc:
            logger.warning("Error fetching metadata: %s", exc)
        except ValueError as exc:
            logger.warning("Malformed metadata from %s: %s", self.metadata_url, exc)
        return None

    async def poll_once(self) -> TrackMetadata | None:
        """Fetch once and fire the callback if the track changed.

        The track only becomes current once the callback returns, so a failed
        callback is retried on the next poll.
        """
        track = await self.fetch_once()
        if track is None:
            return None
        if track.song_id != self.current_song_id:
            await self.on_track_change(track)
            self.current_track = track
        return track

    async def start(self) -> None:
        """Start the background polling loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the loop and release the HTTP client."""
        if self._task is not None:
            self._stopping.set()
            await self._task
            self._task = None
        await self._client.aclose()

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.poll_once()
            except (ClientError, httpx.HTTPError) as exc:
                logger.warning("Track change handler failed: %s", exc)
            except Exception:
                logger.exception("Unexpected error in track change handler")
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except TimeoutError:
                continue
