"""Webhook Events — explicit routing from provider event name to log handler.

Invariants:
    - Every event->handler mapping is visible in one dict, no getattr magic
    - Handlers only log identifying attributes; nothing is persisted
    - Unknown events are logged as unhandled and never raise

Design Decisions:
    - Handlers return the summary they logged so dispatch results are assertable in tests
"""

import logging

from findtell.core.domain_types import WebhookEvent

logger = logging.getLogger(__name__)


def _attributes(event: dict) -> dict:
    data = event.get("data")
    attrs = data.get("attributes") if isinstance(data, dict) else None
    return attrs if isinstance(attrs, dict) else {}


def _pick(attrs: dict, **fields: str) -> dict:
    return {label: attrs.get(source) for label, source in fields.items()}


def _order_created(attrs: dict) -> dict:
    return _pick(attrs, order_id="identifier", email="user_email", total="total_formatted")


def _subscription_with_status(attrs: dict) -> dict:
    return _pick(attrs, subscription_id="identifier", email="user_email", status="status")


def _subscription_cancelled(attrs: dict) -> dict:
    return _pick(attrs, subscription_id="identifier", email="user_email", ends_at="ends_at")


def _subscription_with_email(attrs: dict) -> dict:
    return _pick(attrs, subscription_id="identifier", email="user_email")


def _subscription_paused(attrs: dict) -> dict:
    return _pick(attrs, subscription_id="identifier", resumes_at="resumes_at")


def _subscription_unpaused(attrs: dict) -> dict:
    return _pick(attrs, subscription_id="identifier")


def _license_key_created(attrs: dict) -> dict:
    return _pick(attrs, key="key_short", status="status")


# ADR: every mapping explicit — handling a new event requires editing this dict
_HANDLERS = {
    WebhookEvent.ORDER_CREATED: _order_created,
    WebhookEvent.SUBSCRIPTION_CREATED: _subscription_with_status,
    WebhookEvent.SUBSCRIPTION_UPDATED: _subscription_with_status,
    WebhookEvent.SUBSCRIPTION_CANCELLED: _subscription_cancelled,
    WebhookEvent.SUBSCRIPTION_RESUMED: _subscription_with_email,
    WebhookEvent.SUBSCRIPTION_EXPIRED: _subscription_with_email,
    WebhookEvent.SUBSCRIPTION_PAUSED: _subscription_paused,
    WebhookEvent.SUBSCRIPTION_UNPAUSED: _subscription_unpaused,
    WebhookEvent.LICENSE_KEY_CREATED: _license_key_created,
}


def dispatch_webhook_event(event: dict) -> dict | None:
    """Log a provider event. Returns the logged summary, or None if unhandled."""
    meta = event.get("meta")
    event_name = meta.get("event_name") if isinstance(meta, dict) else None

    try:
        handler = _HANDLERS[WebhookEvent(event_name)]
    except ValueError:
        logger.info(
            f"Unhandled webhook event: {event_name}",
            extra={"event_name": event_name},
        )
        return None

    summary = handler(_attributes(event))
    logger.info(
        f"Webhook {event_name}: {summary}",
        extra={"event_name": event_name},
    )
    return summary
