from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, validator

class OrderCreateRequest(BaseModel):
    amount: Optional[Decimal] = None  # Major currency unit, e.g. rupees
    currency: Optional[str] = None
    receipt: Optional[str] = None

    @validator("amount", pre=True)
    def float_amount_as_text(cls, v):
        # "", false, 0 and friends all mean "no amount"
        if not v:
            return None
        # 99.995 must stay 99.995, not its binary approximation
        if isinstance(v, float):
            return str(v)
        return v

class OrderResponse(BaseModel):
    success: bool = True
    order_id: str
    amount: int  # Amount in smallest currency unit (e.g., paise)
    currency: str
    key_id: str

class PaymentVerificationRequest(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None

    @validator("razorpay_order_id", "razorpay_payment_id", "razorpay_signature", pre=True)
    def numbers_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

class PaymentVerificationResponse(BaseModel):
    success: bool = True
    message: str = "Payment verified successfully"
    payment_id: str
    order_id: str

class WebhookEvent(BaseModel):
    # Razorpay's event names are open-ended; anything signed is acknowledged
    event: Optional[Any] = None
    payload: Optional[Any] = None

    def entity_id(self, entity_type: str) -> Optional[str]:
        """Return ``payload.<entity_type>.entity.id`` if present."""
        if not isinstance(self.payload, dict):
            return None
        wrapper = self.payload.get(entity_type)
        if not isinstance(wrapper, dict):
            return None
        entity = wrapper.get("entity")
        if not isinstance(entity, dict):
            return None
        return entity.get("id")

class WebhookAck(BaseModel):
    received: bool = True
