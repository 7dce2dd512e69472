from datetime import datetime, timezone

import pytest

from payment_faker.contracts.interfaces import TransactionStatus
from payment_faker.response_wrappers import IntegrationResponseError, normalize_webhook_notification


def test_normalizes_faker_webhook():
    raw = {
        "transaction_ref": "TXN-1",
        "transaction_id": "TXN-1",
        "status": "completed",
        "amount": 10000,
        "currency": "xof",
        "message": "Payment completed successfully",
        "timestamp": 1704067200,
    }

    model = normalize_webhook_notification(raw)

    assert model.transaction_ref == "TXN-1"
    assert model.status is TransactionStatus.COMPLETED
    assert model.amount == 10000.0
    assert model.currency == "XOF"
    assert model.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert model.raw == raw


@pytest.mark.parametrize(
    "raw_status, expected",
    [
        ("SUCCESS", TransactionStatus.COMPLETED),
        ("processing", TransactionStatus.PENDING),
        ("error", TransactionStatus.FAILED),
        ("canceled", TransactionStatus.CANCELLED),
    ],
)
def test_maps_gateway_status_aliases(raw_status, expected):
    model = normalize_webhook_notification({"reference": "R", "payment_status": raw_status})
    assert model.status is expected
    assert model.amount is None
    assert model.timestamp is None


@pytest.mark.parametrize(
    "raw",
    [
        {"status": "completed"},
        {"transaction_ref": "T"},
        {"transaction_ref": "T", "status": "refunded"},
        {"transaction_ref": "T", "status": "completed", "amount": 0},
        {"transaction_ref": "T", "status": "completed", "amount": "lots"},
        {"transaction_ref": "T", "status": "completed", "timestamp": "yesterday"},
    ],
)
def test_rejects_malformed_notifications(raw):
    with pytest.raises(IntegrationResponseError):
        normalize_webhook_notification(raw)


def test_rejects_non_mapping():
    with pytest.raises(IntegrationResponseError):
        normalize_webhook_notification(["T"])
