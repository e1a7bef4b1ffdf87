"""Best-effort extraction of the address a request came from."""

from __future__ import annotations

import ipaddress

from fastapi import Request

_MAPPED_PREFIX = "::ffff:"


def normalize_address(raw: str | None) -> str | None:
    """Return a canonical IP address string, or None if `raw` is not one.

    IPv4-mapped IPv6 addresses such as ``::ffff:192.168.1.1`` are unwrapped
    to their IPv4 form.
    """
    if not raw:
        return None
    candidate = raw.strip()
    if candidate.lower().startswith(_MAPPED_PREFIX):
        candidate = candidate[len(_MAPPED_PREFIX):]
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        return None


def client_address(request: Request, *, trust_proxy: bool = False) -> str | None:
    """Return the first valid address among the peer and proxy headers.

    The socket peer is preferred unless `trust_proxy` is set, in which case
    the headers written by a reverse proxy come first.
    """
    forwarded = request.headers.get("x-forwarded-for", "")
    peer = request.client.host if request.client else None
    headers = (
        forwarded.split(",")[0] if forwarded else None,
        request.headers.get("x-real-ip"),
    )
    candidates = (*headers, peer) if trust_proxy else (peer, *headers)
    for raw in candidates:
        address = normalize_address(raw)
        if address is not None:
            return address
    return None
