"""Anonymous listener identity derived from local machine characteristics.

The token is an unauthenticated stand-in for a user account: the server only
uses it as the uniqueness key for "one vote per song". It is cached on disk
and regenerated once it is older than the configured time-to-live.
"""

from __future__ import annotations

import hashlib
import json
import locale
import logging
import os
import platform
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_TTL = timedelta(hours=24)


def collect_traits() -> dict[str, Any]:
    """Snapshot characteristics that are stable for one machine and user."""
    now = datetime.now().astimezone()
    offset = now.utcoffset() or timedelta(0)
    language, encoding = locale.getlocale()
    return {
        "platform": platform.system(),
        "platformRelease": platform.release(),
        "machine": platform.machine(),
        "language": language or "",
        "encoding": encoding or "",
        "timezone": now.tzname() or "",
        "timezoneOffset": int(offset.total_seconds() // 60),
        "hardwareConcurrency": os.cpu_count() or 1,
        "pythonImplementation": platform.python_implementation(),
    }


def generate_identity(traits: Mapping[str, Any]) -> str:
    """Return a 64-character hex token for a set of traits.

    Key order does not matter; equal traits always give the same token.
    """
    canonical = json.dumps(dict(traits), sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CachedIdentity:
    """Identity token together with the moment it was generated."""

    identity: str
    created_at: datetime

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.created_at < ttl


class IdentityCache:
    """File-backed cache of the listener identity with an expiry."""

    def __init__(
        self,
        path: Path,
        ttl: timedelta = DEFAULT_IDENTITY_TTL,
        *,
        traits_provider: Callable[[], Mapping[str, Any]] = collect_traits,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = Path(path).expanduser()
        self.ttl = ttl
        self._traits_provider = traits_provider
        self._clock = clock or (lambda: datetime.now(UTC))

    def load(self) -> CachedIdentity | None:
        """Return the cached entry, or None when missing or unreadable."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            created_at = datetime.fromisoformat(raw["created_at"])
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=UTC)
            return CachedIdentity(identity=str(raw["identity"]), created_at=created_at)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable identity cache %s: %s", self.path, exc)
            return None

    def save(self, entry: CachedIdentity) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"identity": entry.identity, "created_at": entry.created_at.isoformat()}
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def get(self) -> str:
        """Return a fresh identity, regenerating and re-caching an expired one."""
        now = self._clock()
        cached = self.load()
        if cached is not None and cached.is_fresh(now, self.ttl):
            return cached.identity

        entry = CachedIdentity(identity=generate_identity(self._traits_provider()), created_at=now)
        self.save(entry)
        logger.info("Generated listener identity %s...", entry.identity[:10])
        return entry.identity
