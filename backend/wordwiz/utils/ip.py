from __future__ import annotations

from flask import Request


def _first_header(request: Request, name: str) -> str | None:
    # Proxies may append: "client, proxy1, proxy2".
    raw = request.headers.get(name)
    if not raw:
        return None
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    return parts[0] if parts else None


def get_client_ip(request: Request) -> str | None:
    for header in ("CF-Connecting-IP", "X-Real-IP", "X-Forwarded-For"):
        ip = _first_header(request, header)
        if ip:
            return ip
    return request.remote_addr or None


def get_server_url(request: Request) -> str:
    """Public base URL players should open to join, as seen by the host."""
    proto = _first_header(request, "X-Forwarded-Proto") or request.scheme
    host = _first_header(request, "X-Forwarded-Host") or request.host
    return f"{proto}://{host}"
