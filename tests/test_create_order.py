import re

import pytest


@pytest.mark.parametrize(
    "amount, minor_units",
    [
        (1, 100),
        (499.99, 49999),
        (99.995, 10000),
        (10.004, 1000),
        ("250", 25000),
    ],
)
def test_amount_sent_in_minor_units(client, fake_razorpay, amount, minor_units):
    r = client.post("/api/create-order", json={"amount": amount})
    assert r.status_code == 200
    assert fake_razorpay.order.calls[0]["amount"] == minor_units
    assert r.json()["amount"] == minor_units


def test_create_order_response(client, fake_razorpay, settings):
    r = client.post("/api/create-order", json={"amount": 500, "currency": "USD", "receipt": "rcpt_42"})
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "order_id": "order_TEST123",
        "amount": 50000,
        "currency": "USD",
        "key_id": settings.RAZORPAY_KEY_ID,
    }
    assert fake_razorpay.order.calls == [{"amount": 50000, "currency": "USD", "receipt": "rcpt_42"}]


def test_defaults_currency_and_receipt(client, fake_razorpay):
    r = client.post("/api/create-order", json={"amount": 10})
    assert r.status_code == 200
    sent = fake_razorpay.order.calls[0]
    assert sent["currency"] == "INR"
    assert re.fullmatch(r"receipt_\d{13,}", sent["receipt"])


@pytest.mark.parametrize(
    "body",
    [{}, {"amount": None}, {"amount": 0}, {"amount": ""}, {"amount": False}, {"currency": "INR"}],
)
def test_missing_amount(client, fake_razorpay, body):
    r = client.post("/api/create-order", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Amount is required"}
    assert fake_razorpay.order.calls == []


def test_negative_amount_rejected(client, fake_razorpay):
    r = client.post("/api/create-order", json={"amount": -5})
    assert r.status_code == 400
    assert r.json() == {"error": "Amount must be greater than zero"}
    assert fake_razorpay.order.calls == []


def test_non_numeric_amount_rejected(client, fake_razorpay):
    r = client.post("/api/create-order", json={"amount": "ten rupees"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
    assert fake_razorpay.order.calls == []


def test_processor_error_is_not_exposed(client, fake_razorpay, caplog):
    fake_razorpay.order.error = RuntimeError("BadRequestError: key_secret=abc is invalid")
    r = client.post("/api/create-order", json={"amount": 100})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create order"}
    assert "key_secret" not in r.text
    assert "key_secret=abc is invalid" in caplog.text


def test_processor_not_configured(client):
    from app.api.deps import get_razorpay_client
    from app.main import app

    app.dependency_overrides[get_razorpay_client] = lambda: None
    r = client.post("/api/create-order", json={"amount": 100})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create order"}


@pytest.mark.parametrize("headers", [{}, {"Content-Type": "application/json"}])
def test_empty_body_means_missing_amount(client, fake_razorpay, headers):
    r = client.post("/api/create-order", content=b"", headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Amount is required"}
    assert fake_razorpay.order.calls == []


@pytest.mark.parametrize(
    "reply",
    [
        {"amount": 10000, "currency": "INR"},
        {"id": "order_TEST123", "currency": "INR"},
        {"id": "order_TEST123", "amount": "lots", "currency": "INR"},
    ],
)
def test_incomplete_processor_reply(client, fake_razorpay, reply):
    fake_razorpay.order.reply = reply
    r = client.post("/api/create-order", json={"amount": 100})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create order"}
