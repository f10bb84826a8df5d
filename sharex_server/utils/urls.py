"""Request-derived URL pieces (scheme, host, client address)."""

from __future__ import annotations

from typing import Optional

from starlette.requests import Request


def public_scheme(request: Request, force_https: Optional[bool]) -> str:
    return "https" if force_https else request.url.scheme


def public_host(request: Request, trust_proxy: bool = False) -> str:
    """Host (with port, if any) the client used to reach us.

    Behind a trusted proxy the first ``X-Forwarded-Host`` value wins.
    """
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-host", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.headers.get("host") or request.url.netloc


def client_address(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return request.client.host
