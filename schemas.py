from typing import Any
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    status: int | None = None
    message: str = ""


class LightningAddressDetails(BaseModel):
    lnurlp: Any = None
    keysend: Any = None
    nostr: Any = None
    error: ErrorDetail | None = None


class InvoiceResponse(BaseModel):
    invoice: Any = None
    error: ErrorDetail | None = None
