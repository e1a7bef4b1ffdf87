"""Follow the station's now-playing track and its ratings from a terminal."""
from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import timedelta

from radio_calico.client import (
    ClientError,
    IdentityCache,
    NowPlayingPoller,
    RatingsClient,
    TrackMetadata,
)
from radio_calico.core.logging import configure_logging
from radio_calico.core.settings import settings

VOTES = {"up": 1, "down": -1}
VOTE_LABELS = {1: "thumbs up", -1: "thumbs down", None: "not rated"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the current track and rate it")
    parser.add_argument("--metadata-url", default=settings.metadata_url)
    parser.add_argument("--api-url", default=settings.api_base_url)
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.metadata_poll_seconds,
        help="Seconds between metadata polls.",
    )
    parser.add_argument(
        "--vote",
        choices=sorted(VOTES),
        default=None,
        help="Rate the current track once and exit.",
    )
    parser.add_argument("--once", action="store_true", help="Show the current track and exit.")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


async def describe_track(ratings: RatingsClient, track: TrackMetadata, identity: str) -> str:
    """Render a track with its counts and the listener's own vote."""
    summary = await ratings.get_summary(track.song_id)
    mine = await ratings.get_identity_vote(track.song_id, identity)
    lines = [
        f"{track.artist} - {track.title} ({track.album})",
        f"  {track.source_quality} / {track.stream_quality}",
        f"  up {summary.positive_count}  down {summary.negative_count}  you: {VOTE_LABELS[mine]}",
    ]
    if track.recent_tracks:
        lines.append("  previously: " + "; ".join(f"{t.artist}: {t.title}" for t in track.recent_tracks))
    return "\n".join(lines)


async def listen(args: argparse.Namespace) -> int:
    identity = IdentityCache(
        settings.identity_cache_path,
        ttl=timedelta(hours=settings.identity_ttl_hours),
    ).get()

    async with RatingsClient(args.api_url, timeout=settings.http_timeout_seconds) as ratings:

        async def show(track: TrackMetadata) -> None:
            print(await describe_track(ratings, track, identity), flush=True)

        poller = NowPlayingPoller(
            args.metadata_url,
            show,
            interval=args.interval,
            timeout=settings.http_timeout_seconds,
        )

        if args.vote or args.once:
            try:
                track = await poller.fetch_once()
                if track is None:
                    print("Unable to load track info", file=sys.stderr)
                    return 1
                if args.vote:
                    message = await ratings.submit_rating(track.song_id, identity, VOTES[args.vote])
                    print(message)
                await show(track)
            except ClientError as exc:
                print(f"[listen] ERROR: {exc.message}", file=sys.stderr)
                return 1
            finally:
                await poller.stop()
            return 0

        await poller.start()
        try:
            await asyncio.Event().wait()
        finally:
            await poller.stop()
    return 0


def main() -> None:
    args = build_parser().parse_args()
    configure_logging(args.log_level)
    try:
        sys.exit(asyncio.run(listen(args)))
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
