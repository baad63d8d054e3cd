import logging
from typing import Callable, Dict
from app.core.exceptions import ParseError
from app.schemas.payment import WebhookEvent

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[WebhookEvent], None]


def _require_entity_id(event: WebhookEvent, entity_type: str) -> str:
    entity_id = event.entity_id(entity_type)
    if not entity_id:
        raise ParseError(f"Event {event.event} has no {entity_type} entity id")
    return entity_id


def handle_payment_captured(event: WebhookEvent) -> None:
    # Order fulfilment and confirmation emails would hook in here
    logger.info(f"Payment captured: {_require_entity_id(event, 'payment')}")


def handle_payment_failed(event: WebhookEvent) -> None:
    logger.warning(f"Payment failed: {_require_entity_id(event, 'payment')}")


def handle_refund_created(event: WebhookEvent) -> None:
    logger.info(f"Refund created: {_require_entity_id(event, 'refund')}")


def handle_unknown(event: WebhookEvent) -> None:
    logger.info(f"Unhandled event: {event.event}")


WEBHOOK_HANDLERS: Dict[str, WebhookHandler] = {
    "payment.captured": handle_payment_captured,
    "payment.failed": handle_payment_failed,
    "refund.created": handle_refund_created,
}


def dispatch_event(event: WebhookEvent, handlers: Dict[str, WebhookHandler] = WEBHOOK_HANDLERS) -> None:
    """Run the handler registered for ``event.event``; unknown names are only logged."""
    handler = handlers.get(event.event, handle_unknown) if isinstance(event.event, str) else handle_unknown
    handler(event)
