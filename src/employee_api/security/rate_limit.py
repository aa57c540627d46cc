"""Per-client rate limiting."""

from ipaddress import ip_address, ip_network
from typing import Sequence

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from employee_api.config import get_settings

# Trusted by default only outside staging and production
DEVELOPMENT_PROXIES = ("127.0.0.1", "::1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")


def _trusted_proxies() -> Sequence[str]:
    settings = get_settings()
    if settings.trusted_proxies_list:
        return settings.trusted_proxies_list
    if settings.environment == "development":
        return DEVELOPMENT_PROXIES
    return ()


def _is_trusted_proxy(client_ip: str, trusted_proxies: Sequence[str]) -> bool:
    """Check if an address matches any trusted proxy IP or CIDR range.

    Unparseable addresses (e.g. "testclient") are never trusted.
    """
    try:
        addr = ip_address(client_ip)
        return any(
            addr in ip_network(proxy, strict=False) if "/" in proxy else addr == ip_address(proxy)
            for proxy in trusted_proxies
        )
    except ValueError:
        return False


def get_real_client_ip(request: Request) -> str:
    """Rate-limit key: the client address.

    X-Forwarded-For is honoured only when the direct peer is a trusted proxy,
    so clients cannot pick their own bucket by sending the header.

    Args:
        request: Incoming request

    Returns:
        Client IP address
    """
    direct_ip = get_remote_address(request)
    if not _is_trusted_proxy(direct_ip, _trusted_proxies()):
        return direct_ip

    forwarded_for = request.headers.get("X-Forwarded-For", "")
    client_ip = forwarded_for.split(",")[0].strip()
    try:
        ip_address(client_ip)
    except ValueError:
        return direct_ip
    return client_ip


_settings = get_settings()

API_DEFAULT_LIMIT = f"{_settings.rate_limit_default}/minute"
WRITE_OPERATION_LIMIT = f"{_settings.rate_limit_write}/minute"

# In-memory storage; each worker process keeps its own counters
limiter = Limiter(key_func=get_real_client_ip, default_limits=[API_DEFAULT_LIMIT])
