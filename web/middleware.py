"""
Web front end middleware.

Records the client IP on request.state so templates can show it.
"""

from typing import Any, Callable

from fastapi import Request, Response

UNKNOWN_IP = "unknown"


def ip_from_request(request: Request) -> str:
    """
    Best guess at the client address.

    A proxy-supplied X-Forwarded-For wins; otherwise the socket peer is used.
    """
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip() or UNKNOWN_IP
    if request.client is None or not request.client.host:
        return UNKNOWN_IP
    return request.client.host


async def client_ip_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    request.state.ip = ip_from_request(request)
    return await call_next(request)


def ip_from_state(request: Request) -> str:
    return getattr(request.state, "ip", UNKNOWN_IP)
