"""Inbound provider webhooks."""

import json

from fastapi import APIRouter, HTTPException, Request, status

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger

logger = get_module_logger()
router = APIRouter(tags=["Webhooks"])
limiter = get_limiter()


@router.post("/folio/webhook/incoming_sms")
@limiter.limit("60/minute")
async def folio_incoming_sms(request: Request):
    """Receive an incoming SMS notification from Folio and log it."""
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except ValueError as e:
        logger.warning("folio_incoming_sms_invalid_json", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON payload"
        ) from e

    logger.info("folio_incoming_sms_received", payload=payload)
    return {"status": "received"}
