from typing import Optional
from fastapi import APIRouter, Depends, Header, Request
from app.api.deps import get_payment_service
from app.core.exceptions import PaymentAppError, ProcessorError
from app.schemas.common import ErrorResponse
from app.schemas.payment import (
    OrderCreateRequest,
    OrderResponse,
    PaymentVerificationRequest,
    PaymentVerificationResponse,
    WebhookAck,
)
from app.services.payment_service import PaymentService
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/create-order", response_model=OrderResponse, responses=ERROR_RESPONSES)
async def create_order(
    request: Optional[OrderCreateRequest] = None,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Create a Razorpay order before the frontend opens Checkout.

    Accepts: amount (major unit), currency (default INR), receipt
    Returns: order_id, amount in minor units, currency, key_id
    """
    # An empty body is treated like {} so it reaches the amount check
    request = request or OrderCreateRequest()
    return await service.create_order(request.amount, request.currency, request.receipt)


@router.post("/verify-payment", response_model=PaymentVerificationResponse, responses=ERROR_RESPONSES)
async def verify_payment(
    request: Optional[PaymentVerificationRequest] = None,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Verify the signature Razorpay Checkout hands back to the browser.

    The expected signature is HMAC-SHA256("<order_id>|<payment_id>") keyed
    by RAZORPAY_KEY_SECRET.
    """
    request = request or PaymentVerificationRequest()
    try:
        return service.verify_payment(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature,
        )
    except PaymentAppError:
        raise
    except Exception as e:
        logger.error(f"Error verifying payment: {str(e)}")
        raise ProcessorError("Verification failed")


@router.post("/webhook", response_model=WebhookAck, responses=ERROR_RESPONSES)
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(None),
    service: PaymentService = Depends(get_payment_service),
):
    """
    Handle Razorpay webhook events.

    - Verifies x-razorpay-signature over the raw body using RAZORPAY_WEBHOOK_SECRET
    - Parses the event only after the signature matches
    - Acknowledges every verified event, known or not, so Razorpay does not retry
    """
    body = await request.body()

    try:
        service.process_webhook(body, x_razorpay_signature)
    except PaymentAppError:
        raise
    except Exception as e:
        logger.error(f"Webhook processing error: {str(e)}")
        raise ProcessorError("Webhook processing failed")
    return WebhookAck()
