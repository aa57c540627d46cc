"""Tests for rate-limit client identification."""

from starlette.requests import Request

from employee_api.security.rate_limit import _is_trusted_proxy, get_real_client_ip


def make_request(client_ip: str, forwarded_for: str | None = None) -> Request:
    headers = []
    if forwarded_for is not None:
        headers.append((b"x-forwarded-for", forwarded_for.encode()))
    return Request({"type": "http", "client": (client_ip, 50000), "headers": headers})


class TestClientIp:
    def test_forwarded_header_ignored_from_untrusted_peer(self) -> None:
        request = make_request("203.0.113.9", forwarded_for="198.51.100.1")

        assert get_real_client_ip(request) == "203.0.113.9"

    def test_forwarded_header_used_from_trusted_proxy(self) -> None:
        request = make_request("10.0.0.5", forwarded_for="198.51.100.1, 10.0.0.5")

        assert get_real_client_ip(request) == "198.51.100.1"

    def test_malformed_forwarded_header_falls_back_to_peer(self) -> None:
        request = make_request("10.0.0.5", forwarded_for="not-an-ip")

        assert get_real_client_ip(request) == "10.0.0.5"

    def test_proxy_matching(self) -> None:
        assert _is_trusted_proxy("10.1.2.3", ["10.0.0.0/8"])
        assert _is_trusted_proxy("192.0.2.1", ["192.0.2.1"])
        assert not _is_trusted_proxy("192.0.2.2", ["192.0.2.1"])
        assert not _is_trusted_proxy("testclient", ["10.0.0.0/8"])
        assert not _is_trusted_proxy("10.1.2.3", [])
