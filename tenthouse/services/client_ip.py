# tenthouse/services/client_ip.py
from __future__ import annotations

import ipaddress
from fastapi import Request

UNKNOWN_IP = "0.0.0.0"

# checked in order; the first public address wins
PROXY_HEADERS = ("cf-connecting-ip", "client-ip", "x-forwarded-for")


def is_public_ip(value: str) -> bool:
    """
    True for a parsable address outside private, reserved, loopback,
    link-local and unspecified ranges.
    """
    try:
        ip = ipaddress.ip_address(value)
    except ValueError:
        return False
    return not (
        ip.is_private
        or ip.is_reserved
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_unspecified
        or ip.is_multicast
    )


def get_client_ip(request: Request, trust_proxy_headers: bool = True) -> str:
    """
    Best-effort origin IP for rate limiting. Proxy headers are only trusted
    when they carry a public address; otherwise the socket peer is used.
    """
    if trust_proxy_headers:
        for header in PROXY_HEADERS:
            raw = request.headers.get(header)
            if not raw:
                continue
            candidate = raw.split(",")[0].strip()
            if is_public_ip(candidate):
                return candidate

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IP
