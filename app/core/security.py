import hashlib
import hmac
from typing import Optional, Union


def compute_signature(message: Union[bytes, str], secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``message`` keyed by ``secret``."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_signature(message: Union[bytes, str], secret: str, signature: Optional[str]) -> bool:
    """
    Check a Razorpay signature.

    The comparison is exact (no case or whitespace folding) and runs in
    constant time. Webhook callers must pass the request body bytes exactly
    as received; re-serialized JSON will not match.
    """
    if not signature:
        return False
    expected = compute_signature(message, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


def payment_signature_message(order_id: str, payment_id: str) -> str:
    # Razorpay Checkout signs "<order_id>|<payment_id>" with the API key secret
    return f"{order_id}|{payment_id}"
