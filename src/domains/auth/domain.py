# src/domains/auth/domain.py
from urllib.parse import urlparse

PRODUCTION_DOMAIN = "streme.fun"
DEFAULT_DOMAIN = "localhost:3000"

DEFAULT_PORTS = {"http": 80, "https": 443}


def _origin_host(origin: str) -> str | None:
    """Host (and port) of an Origin header, or None if it is not a URL."""
    try:
        parsed = urlparse(origin.strip())
        hostname = parsed.hostname
        port = parsed.port
    except ValueError:
        return None

    if not parsed.scheme or not hostname:
        return None
    if port is None or DEFAULT_PORTS.get(parsed.scheme.lower()) == port:
        return hostname
    return f"{hostname}:{port}"


def resolve_sign_in_domain(
    is_production: bool,
    host: str | None,
    origin: str | None = None,
    *,
    production_domain: str = PRODUCTION_DOMAIN,
    default_domain: str = DEFAULT_DOMAIN,
) -> str:
    """
    Domain a sign-in message must be bound to for this request.

    Production always uses the canonical domain. Elsewhere the Origin host
    wins so tunnel URLs work, then the Host header, then the local default.
    Never raises.
    """
    if is_production:
        return production_domain

    if origin:
        origin_host = _origin_host(origin)
        if origin_host:
            return origin_host

    return host or default_domain
