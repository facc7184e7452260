"""
Signed relay endpoint.

Forwards a JSON payload to a remote environment, signed with the credential
of the realm derived from the target URL.
"""
import logging
import uuid

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..dispatcher import RequestDispatcher
from ..errors import RelayError
from ..models import RelayRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/v1/relay")
async def relay(body: RelayRequest, raw_request: Request):
    """Relay `payload` to `url` (or to the URL of `account`)"""
    request_id = str(uuid.uuid4())[:8]
    dispatcher: RequestDispatcher = raw_request.app.state.dispatcher

    target = body.url or f"account:{body.account}"
    logger.info(f"[{request_id}] Relay request to {target}")

    try:
        if body.account is not None:
            result = await dispatcher.send_to_account(body.account, body.payload, request_id)
        else:
            result = await dispatcher.send(body.url, body.payload, request_id)
    except RelayError as e:
        logger.warning(f"[{request_id}] Relay failed ({e.kind}): {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    return JSONResponse(content=result)
