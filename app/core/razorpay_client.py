import logging
from typing import Optional
import razorpay
from app.core.config import settings

logger = logging.getLogger(__name__)

class RazorpayManager:
    client: Optional[razorpay.Client] = None

    @classmethod
    def get_client(cls) -> Optional[razorpay.Client]:
        """
        Returns the process-wide Razorpay client, creating it on first use.
        Returns None when RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET are not set,
        so order creation can fail per request instead of at import time.
        """
        if cls.client is None:
            if not settings.razorpay_configured:
                logger.warning("Razorpay keys not set. Order creation will fail.")
                return None
            cls.client = razorpay.Client(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))
        return cls.client

# Global instance to access the client manager
razorpay_manager = RazorpayManager()
