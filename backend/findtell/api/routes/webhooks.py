"""Provider Webhooks — signed Lemon Squeezy event receiver.

Invariants:
    - X-Signature header required (401 without it)
    - With a webhook secret configured, the signature must match the raw body's HMAC (401 otherwise)
    - Once authenticated, the response is always 200 so the provider does not retry
      events that can never succeed

Design Decisions:
    - Raw body read before JSON parsing: the HMAC covers the exact bytes sent
    - Handler failures are logged with traceback and acknowledged with received=false
"""

import json
import logging

from fastapi import APIRouter, Depends, Header, Request

from findtell.api.dependencies import get_app_settings
from findtell.config import Settings
from findtell.core.errors import InputError, UnauthorizedError
from findtell.core.webhook_signature import verify_signature
from findtell.services.webhook_events import dispatch_webhook_event

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.post("/lemon-squeezy")
async def receive_lemon_squeezy_event(
    request: Request,
    x_signature: str | None = Header(None),
    settings: Settings = Depends(get_app_settings),
):
    """Verify and log a provider webhook event."""
    if not x_signature:
        raise UnauthorizedError("Missing signature")

    raw_body = await request.body()
    secret = settings.lemon_squeezy_webhook_secret
    if secret and not verify_signature(raw_body, x_signature, secret):
        raise UnauthorizedError("Invalid signature")

    try:
        event = json.loads(raw_body)
    except ValueError:
        raise InputError("Webhook body must be valid JSON", "body")
    if not isinstance(event, dict):
        raise InputError("Webhook body must be a JSON object", "body")

    try:
        dispatch_webhook_event(event)
    except Exception as e:
        logger.error(f"Webhook handler failed: {e}", exc_info=True)
        return {"received": False, "error": "Webhook processing failed"}
    return {"received": True}
