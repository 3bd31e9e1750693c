import logging
from fastapi import APIRouter, Request

from core.errors import InvalidIdentifier, MissingCallback, UpstreamError
from core.responses import PrettyJSONResponse
from schemas import ErrorDetail, InvoiceResponse, LightningAddressDetails
from services.aggregator import get_lightning_address_details
from services.invoice import IDENTIFIER_PARAM, generate_invoice

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status: int | None, message: str) -> ErrorDetail:
    return ErrorDetail(status=status, message=message)


@router.get("/lightning-address-details")
async def lightning_address_details(ln: str = ""):
    try:
        result = await get_lightning_address_details(ln)
        result.raise_for_failure()
    except InvalidIdentifier as e:
        logger.warning(str(e))
        body = LightningAddressDetails(error=_error(400, str(e)))
        return PrettyJSONResponse(content=body.model_dump(), status_code=400)
    except UpstreamError as e:
        body = LightningAddressDetails(error=_error(e.upstream_status, str(e)))
        return PrettyJSONResponse(content=body.model_dump(), status_code=e.status_code)

    body = LightningAddressDetails(lnurlp=result.lnurlp, keysend=result.keysend, nostr=result.nostr)
    response = PrettyJSONResponse(content=body.model_dump())
    if result.cache_control is not None:
        response.headers["Cache-Control"] = result.cache_control
    return response


@router.get("/generate-invoice")
async def invoice(request: Request, ln: str = ""):
    params = [(k, v) for k, v in request.query_params.multi_items() if k != IDENTIFIER_PARAM]
    try:
        result = await generate_invoice(ln, params)
    except InvalidIdentifier as e:
        logger.warning(str(e))
        body = InvoiceResponse(error=_error(400, str(e)))
        return PrettyJSONResponse(content=body.model_dump(), status_code=400)
    except MissingCallback as e:
        logger.warning(str(e))
        body = InvoiceResponse(error=_error(400, str(e)))
        return PrettyJSONResponse(content=body.model_dump(), status_code=e.status_code)
    except UpstreamError as e:
        body = InvoiceResponse(error=_error(e.upstream_status, str(e)))
        return PrettyJSONResponse(content=body.model_dump(), status_code=e.status_code)

    return PrettyJSONResponse(content=InvoiceResponse(invoice=result.invoice).model_dump())
