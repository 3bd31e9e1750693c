"""Shared fixtures: a fake upstream web served through httpx.MockTransport."""

import httpx
import pytest

import services.fetcher as fetcher_svc


class FakeUpstream:
    """Routes requests by full URL to canned responses.

    Unknown URLs raise ``httpx.ConnectError`` so they behave like an
    unreachable host.
    """

    def __init__(self):
        self.routes: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, status_code: int = 200, json=None, text=None, headers=None):
        if json is not None:
            self.routes[url] = httpx.Response(status_code, json=json, headers=headers)
        else:
            self.routes[url] = httpx.Response(status_code, text=text or "", headers=headers)

    def fail(self, url: str, exc: Exception | None = None):
        self.routes[url] = exc or httpx.ConnectError("connection refused")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError(f"no route to {request.url}", request=request)
        if isinstance(route, Exception):
            raise route
        return route

    def requested_urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(upstream, monkeypatch):
    """An AsyncClient wired to the fake upstream, also installed as the shared client."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    monkeypatch.setattr(fetcher_svc, "http_client", http_client)
    return http_client


LNURLP = "https://example.com/.well-known/lnurlp/alice"
KEYSEND = "https://example.com/.well-known/keysend/alice"
NOSTR = "https://example.com/.well-known/nostr.json?name=alice"

LNURLP_DOC = {
    "tag": "payRequest",
    "callback": "https://pay.example/cb?amount=1000",
    "minSendable": 1000,
    "maxSendable": 100000000,
    "metadata": "[[\"text/plain\", \"alice\"]]",
}
KEYSEND_DOC = {"status": "OK", "tag": "keysend", "pubkey": "02" + "ab" * 32, "customData": []}
NOSTR_DOC = {"names": {"alice": "ff" * 32}}
