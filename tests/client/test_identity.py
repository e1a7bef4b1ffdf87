"""Tests for the cached listener identity."""

import json
from datetime import UTC, datetime, timedelta

from radio_calico.client.identity import IdentityCache, generate_identity

TRAITS = {"platform": "Linux", "language": "en_US", "hardwareConcurrency": 8}


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def make_cache(tmp_path, clock, traits=TRAITS):
    return IdentityCache(
        tmp_path / "identity.json",
        ttl=timedelta(hours=24),
        traits_provider=lambda: dict(traits),
        clock=clock,
    )


def test_generate_identity_is_deterministic_hex() -> None:
    token = generate_identity(TRAITS)
    reordered = dict(reversed(list(TRAITS.items())))

    assert token == generate_identity(reordered)
    assert len(token) == 64
    assert int(token, 16) >= 0
    assert token != generate_identity({**TRAITS, "hardwareConcurrency": 4})


def test_identity_is_reused_while_fresh(tmp_path) -> None:
    clock = FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))
    first = make_cache(tmp_path, clock).get()

    clock.now += timedelta(hours=23)
    again = make_cache(tmp_path, clock, traits={"platform": "Other"}).get()

    assert again == first


def test_identity_regenerates_after_expiry(tmp_path) -> None:
    clock = FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))
    first = make_cache(tmp_path, clock).get()

    clock.now += timedelta(hours=25)
    cache = make_cache(tmp_path, clock, traits={"platform": "Other"})
    renewed = cache.get()

    assert renewed != first
    assert renewed == generate_identity({"platform": "Other"})
    assert cache.load().created_at == clock.now


def test_corrupt_cache_is_replaced(tmp_path) -> None:
    (tmp_path / "identity.json").write_text("{not json", encoding="utf-8")
    clock = FakeClock(datetime(2024, 5, 1, tzinfo=UTC))
    cache = make_cache(tmp_path, clock)

    assert cache.load() is None
    token = cache.get()

    saved = json.loads((tmp_path / "identity.json").read_text(encoding="utf-8"))
    assert saved["identity"] == token == generate_identity(TRAITS)
