import logging
from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import unquote_plus, urlencode, urlsplit, urlunsplit
import httpx

from core.errors import InvoiceFetchFailed, MissingCallback, UpstreamUnavailable
from core.lightning_address import to_urls
from services.fetcher import get_json

logger = logging.getLogger(__name__)

IDENTIFIER_PARAM = "ln"


@dataclass(frozen=True)
class InvoiceResult:
    invoice: Any
    url: str


def merge_query(callback: str, params: Iterable[tuple[str, str]]) -> str:
    """Append caller params to the callback's own query string.

    Names present on both sides accumulate values instead of overwriting.
    The lightning address parameter is never forwarded.
    """
    httpx.URL(callback)  # raises InvalidURL
    parts = urlsplit(callback)
    # Callback's own query is kept byte-for-byte, minus any identifier items
    query = [
        segment for segment in parts.query.split("&")
        if segment and unquote_plus(segment.split("=", 1)[0]) != IDENTIFIER_PARAM
    ]
    extra = urlencode([(name, value) for name, value in params if name != IDENTIFIER_PARAM])
    if extra:
        query.append(extra)
    return urlunsplit(parts._replace(query="&".join(query)))


def extract_callback(identifier: str, document: Any) -> str:
    callback = document.get("callback") if isinstance(document, dict) else None
    if not isinstance(callback, str) or not callback:
        raise MissingCallback(identifier)
    return callback


async def generate_invoice(
    identifier: str,
    params: Iterable[tuple[str, str]],
    client: httpx.AsyncClient | None = None,
) -> InvoiceResult:
    lnurlp_url = to_urls(identifier).lnurlp

    lnurlp = await get_json(lnurlp_url, client)
    if not lnurlp.ok:
        logger.error(f"{lnurlp.error} (identifier={identifier})")
        raise UpstreamUnavailable(lnurlp.error, lnurlp.status_code)
    if not isinstance(lnurlp.body, dict):
        logger.error(f"LNURL-pay document for {identifier} is not a JSON object: {lnurlp_url}")
        raise UpstreamUnavailable(f"Unexpected LNURL-pay document: {lnurlp_url}", lnurlp.status_code)

    callback = extract_callback(identifier, lnurlp.body)
    try:
        invoice_url = merge_query(callback, params)
    except (httpx.InvalidURL, ValueError) as e:
        logger.error(f"Invalid callback {callback!r} for {identifier}: {e}")
        raise MissingCallback(identifier, "LNURL-pay callback is not a valid URL") from e

    invoice = await get_json(invoice_url, client)
    if not invoice.ok:
        logger.error(f"{invoice.error} (identifier={identifier})")
        # Status comes from the invoice fetch, not the earlier lnurlp one
        raise InvoiceFetchFailed(invoice.error, invoice.status_code)

    return InvoiceResult(invoice=invoice.body, url=invoice_url)
