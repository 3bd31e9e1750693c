import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any
import httpx
from config import FETCH_TIMEOUT, URL_REWRITES

logger = logging.getLogger(__name__)

http_client: httpx.AsyncClient | None = None


class FailureReason(str, Enum):
    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"


@dataclass(frozen=True)
class FetchOutcome:
    url: str
    body: Any = None
    status_code: int | None = None
    headers: httpx.Headers | None = None
    reason: FailureReason | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def responded(self) -> bool:
        """Whether the upstream answered at all, whatever the status."""
        return self.status_code is not None


def build_client(**kwargs) -> httpx.AsyncClient:
    kwargs.setdefault("timeout", FETCH_TIMEOUT)
    kwargs.setdefault("follow_redirects", True)
    return httpx.AsyncClient(**kwargs)


def rewrite_url(url: str, rewrites: list[tuple[str, str]] | None = None) -> str:
    if rewrites is None:
        rewrites = URL_REWRITES
    for prefix, replacement in rewrites:
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


async def get_json(
    url: str,
    client: httpx.AsyncClient | None = None,
    rewrites: list[tuple[str, str]] | None = None,
) -> FetchOutcome:
    """GET ``url`` and decode its JSON body.

    Never raises for upstream problems: transport errors, statuses >= 300 and
    undecodable bodies are all reported through ``FetchOutcome.reason``.
    """
    client = client or http_client
    if client is None:
        raise RuntimeError("HTTP client not initialised")

    target = rewrite_url(url, rewrites)
    if target != url:
        logger.debug(f"Rewrote {url} -> {target}")

    try:
        response = await client.get(target)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        return FetchOutcome(url=url, reason=FailureReason.TRANSPORT, error=f"No details: {url} - {e}")

    if response.status_code >= 300:
        return FetchOutcome(
            url=url,
            status_code=response.status_code,
            headers=response.headers,
            reason=FailureReason.STATUS,
            error=f"No details: {url} - status {response.status_code}",
        )

    try:
        body = response.json()
    except ValueError as e:
        return FetchOutcome(
            url=url,
            status_code=response.status_code,
            headers=response.headers,
            reason=FailureReason.DECODE,
            error=f"Invalid JSON: {url} - {e}",
        )

    return FetchOutcome(url=url, body=body, status_code=response.status_code, headers=response.headers)
