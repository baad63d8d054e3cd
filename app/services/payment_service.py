import asyncio
import json
import logging
import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional
from pydantic import ValidationError as PydanticValidationError
from app.core.config import Settings
from app.core.exceptions import ParseError, ProcessorError, SignatureMismatch, ValidationError
from app.core.security import payment_signature_message, verify_signature
from app.schemas.payment import OrderResponse, PaymentVerificationResponse, WebhookEvent
from app.services.webhook_handlers import dispatch_event

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "INR"


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to minor units, rounding half up (99.995 -> 10000)."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def default_receipt() -> str:
    return f"receipt_{int(time.time() * 1000)}"


def parse_event(body: bytes) -> WebhookEvent:
    try:
        return WebhookEvent.model_validate(json.loads(body))
    except (ValueError, PydanticValidationError) as e:
        logger.error(f"Webhook error: malformed event body: {e}")
        raise ParseError("Webhook processing failed") from e


class PaymentService:
    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self.client = client

    async def create_order(
        self,
        amount: Optional[Decimal],
        currency: Optional[str] = None,
        receipt: Optional[str] = None,
    ) -> OrderResponse:
        if not amount:
            raise ValidationError("Amount is required")
        if not amount.is_finite():
            raise ValidationError("Amount must be a finite number")
        if amount < 0:
            raise ValidationError("Amount must be greater than zero")

        data = {
            "amount": to_minor_units(amount),
            "currency": currency or DEFAULT_CURRENCY,
            "receipt": receipt or default_receipt(),
        }

        if not self.client:
            logger.error("Error creating order: Razorpay client not initialized")
            raise ProcessorError("Failed to create order")

        try:
            order = await asyncio.wait_for(
                asyncio.to_thread(self.client.order.create, data=data),
                timeout=self.settings.RAZORPAY_TIMEOUT_SECONDS,
            )
            response = OrderResponse(
                order_id=order["id"],
                amount=order["amount"],
                currency=order["currency"],
                key_id=self.settings.RAZORPAY_KEY_ID,
            )
        except asyncio.TimeoutError:
            logger.error(
                f"Error creating order: Razorpay did not respond within "
                f"{self.settings.RAZORPAY_TIMEOUT_SECONDS}s"
            )
            raise ProcessorError("Failed to create order")
        except Exception as e:
            logger.error(f"Error creating order: {e}")
            raise ProcessorError("Failed to create order") from e

        logger.info(f"Created order {response.order_id} for {response.amount} {response.currency}")
        return response

    def verify_payment(
        self,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
    ) -> PaymentVerificationResponse:
        if not order_id or not payment_id or not signature:
            raise ValidationError("Missing payment details")

        if not self.settings.RAZORPAY_KEY_SECRET:
            logger.error("Error verifying payment: RAZORPAY_KEY_SECRET is not set")
            raise ProcessorError("Verification failed")

        message = payment_signature_message(order_id, payment_id)
        if not verify_signature(message, self.settings.RAZORPAY_KEY_SECRET, signature):
            logger.warning(f"Invalid payment signature for order {order_id}, payment {payment_id}")
            raise SignatureMismatch("Invalid payment signature", include_success=True)

        # TODO: mark the order as paid once an order store exists
        logger.info(f"Payment {payment_id} verified for order {order_id}")
        return PaymentVerificationResponse(payment_id=payment_id, order_id=order_id)

    def process_webhook(self, body: bytes, signature: Optional[str]) -> WebhookEvent:
        """
        Verify and dispatch a Razorpay webhook.

        The signature is checked over ``body`` exactly as received, before any
        JSON parsing. Unknown event names are acknowledged, not rejected.
        """
        webhook_secret = self.settings.RAZORPAY_WEBHOOK_SECRET
        if not webhook_secret:
            logger.error("Webhook error: RAZORPAY_WEBHOOK_SECRET is not set")
            raise ProcessorError("Webhook processing failed")

        if not verify_signature(body, webhook_secret, signature):
            logger.warning("Invalid webhook signature")
            raise SignatureMismatch("Invalid webhook signature")

        event = parse_event(body)
        logger.info(f"Webhook event received: {event.event}")
        try:
            dispatch_event(event)
        except ParseError as e:
            logger.error(f"Webhook error: {e}")
            raise ParseError("Webhook processing failed") from e
        return event
