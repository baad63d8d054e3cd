from typing import Any, Optional
from fastapi import Depends
from app.core.config import Settings, settings
from app.core.razorpay_client import razorpay_manager
from app.services.payment_service import PaymentService

# Settings and the Razorpay client are process-wide and built once.
# Handlers receive them through these dependencies so tests can swap
# in a fake client via app.dependency_overrides.

def get_settings() -> Settings:
    return settings

def get_razorpay_client() -> Optional[Any]:
    return razorpay_manager.get_client()

def get_payment_service(
    app_settings: Settings = Depends(get_settings),
    client: Optional[Any] = Depends(get_razorpay_client),
) -> PaymentService:
    return PaymentService(app_settings, client)
