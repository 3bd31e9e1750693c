from typing import NamedTuple

from core.errors import InvalidIdentifier

LNURLP_URL = "https://{domain}/.well-known/lnurlp/{local}"
KEYSEND_URL = "https://{domain}/.well-known/keysend/{local}"
NOSTR_URL = "https://{domain}/.well-known/nostr.json?name={local}"


class ResolvedEndpoints(NamedTuple):
    lnurlp: str
    keysend: str
    nostr: str


def split_address(identifier: str) -> tuple[str, str]:
    parts = identifier.split("@")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidIdentifier(identifier)
    return parts[0], parts[1]


def to_urls(identifier: str) -> ResolvedEndpoints:
    """Map ``local@domain`` onto its well-known discovery URLs."""
    local, domain = split_address(identifier)
    return ResolvedEndpoints(
        lnurlp=LNURLP_URL.format(domain=domain, local=local),
        keysend=KEYSEND_URL.format(domain=domain, local=local),
        nostr=NOSTR_URL.format(domain=domain, local=local),
    )
