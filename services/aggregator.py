import asyncio
import logging
from dataclasses import dataclass
from typing import Any
import httpx

from core.errors import AllUpstreamsFailed
from core.lightning_address import to_urls
from services.fetcher import FetchOutcome, get_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateResult:
    identifier: str
    lnurlp_outcome: FetchOutcome
    keysend_outcome: FetchOutcome
    nostr_outcome: FetchOutcome

    @property
    def lnurlp(self) -> Any:
        return self.lnurlp_outcome.body if self.lnurlp_outcome.ok else None

    @property
    def keysend(self) -> Any:
        return self.keysend_outcome.body if self.keysend_outcome.ok else None

    @property
    def nostr(self) -> Any:
        return self.nostr_outcome.body if self.nostr_outcome.ok else None

    @property
    def ok(self) -> bool:
        return self.lnurlp_outcome.ok or self.keysend_outcome.ok or self.nostr_outcome.ok

    @property
    def cache_control(self) -> str | None:
        # Taken from lnurlp whatever its status; only a missing response drops it
        if not self.lnurlp_outcome.responded or self.lnurlp_outcome.headers is None:
            return None
        return self.lnurlp_outcome.headers.get("cache-control")

    def raise_for_failure(self) -> None:
        """Raise ``AllUpstreamsFailed`` carrying the lnurlp failure detail."""
        if not self.ok:
            raise AllUpstreamsFailed(
                self.lnurlp_outcome.error or f"No details for {self.identifier}",
                self.lnurlp_outcome.status_code,
            )


async def get_lightning_address_details(
    identifier: str,
    client: httpx.AsyncClient | None = None,
) -> AggregateResult:
    """Fetch lnurlp, keysend and nostr documents for ``identifier`` in parallel.

    Waits for all three fetches. Raises ``InvalidIdentifier`` before any I/O
    when the address is malformed.
    """
    endpoints = to_urls(identifier)

    lnurlp, keysend, nostr = await asyncio.gather(
        get_json(endpoints.lnurlp, client),
        get_json(endpoints.keysend, client),
        get_json(endpoints.nostr, client),
    )

    for outcome in (lnurlp, keysend, nostr):
        if not outcome.ok:
            logger.error(f"{outcome.error} (identifier={identifier}, reason={outcome.reason.value})")

    result = AggregateResult(
        identifier=identifier,
        lnurlp_outcome=lnurlp,
        keysend_outcome=keysend,
        nostr_outcome=nostr,
    )
    if not result.ok:
        logger.error(f"Could not retrieve details for lightning address {identifier}")
    return result
