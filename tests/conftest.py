import os
import time
from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

# Test credentials, set before app.core.config is imported
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key_id")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test-key-secret")
os.environ.setdefault("RAZORPAY_WEBHOOK_SECRET", "test-webhook-secret")
os.environ.pop("FRONTEND_URL", None)


class FakeOrderResource:
    """Stands in for ``razorpay.Client().order``; records every create call."""

    def __init__(self) -> None:
        self.calls: List[dict] = []
        self.error: Optional[Exception] = None
        self.delay: float = 0.0
        self.reply: Optional[dict] = None

    def create(self, data=None, **kwargs):
        self.calls.append(data)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.reply is not None:
            return self.reply
        return {
            "id": "order_TEST123",
            "entity": "order",
            "amount": data["amount"],
            "currency": data["currency"],
            "receipt": data["receipt"],
            "status": "created",
        }


class FakeRazorpayClient:
    def __init__(self) -> None:
        self.order = FakeOrderResource()


@pytest.fixture
def fake_razorpay() -> FakeRazorpayClient:
    return FakeRazorpayClient()


@pytest.fixture
def settings():
    from app.core.config import settings
    return settings


@pytest.fixture
def client(fake_razorpay) -> Generator[TestClient, None, None]:
    from app.api.deps import get_razorpay_client
    from app.main import app

    app.dependency_overrides[get_razorpay_client] = lambda: fake_razorpay
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def override_settings():
    """Swap the injected settings for a copy with some fields changed."""
    from app.api.deps import get_settings
    from app.core.config import settings
    from app.main import app

    def _override(**changes):
        patched = settings.model_copy(update=changes)
        app.dependency_overrides[get_settings] = lambda: patched
        return patched

    return _override
