"""
Tests for request helpers.
"""

from django.test import RequestFactory

from apps.web.core.http import client_ip


def _request(forwarded: str = "", remote_addr: str = "10.0.0.5"):
    headers = {"X-Forwarded-For": forwarded} if forwarded else {}
    return RequestFactory().get("/", headers=headers, REMOTE_ADDR=remote_addr)


class TestClientIp:
    def test_ignores_forwarded_header_without_trusted_proxy(self, settings):
        settings.TRUSTED_PROXY_COUNT = 0

        assert client_ip(_request("144.126.193.139")) == "10.0.0.5"

    def test_uses_hop_appended_by_trusted_proxy(self, settings):
        settings.TRUSTED_PROXY_COUNT = 1

        # Client forged the first entry; our proxy appended the real one
        request = _request("144.126.193.139, 203.0.113.9")

        assert client_ip(request) == "203.0.113.9"

    def test_two_trusted_proxies(self, settings):
        settings.TRUSTED_PROXY_COUNT = 2

        request = _request("1.1.1.1, 203.0.113.9, 10.0.0.2")

        assert client_ip(request) == "203.0.113.9"

    def test_short_header_falls_back_to_remote_addr(self, settings):
        settings.TRUSTED_PROXY_COUNT = 2

        assert client_ip(_request("203.0.113.9")) == "10.0.0.5"

    def test_no_header_uses_remote_addr(self, settings):
        settings.TRUSTED_PROXY_COUNT = 1

        assert client_ip(_request()) == "10.0.0.5"
