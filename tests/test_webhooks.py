import logging

import pytest

from payment_faker.clients.faker import PaymentFakerClient
from payment_faker.clients.webhooks import RecordingWebhookDispatcher
from payment_faker.contracts.interfaces import ResolutionOutcome, WebhookPayload
from payment_faker.errors import InvalidStateError

SUCCESS_URL = "https://merchant.example/success"
CANCEL_URL = "https://merchant.example/cancel"
WEBHOOK_URL = "https://merchant.example/webhook"


def _initiate(client, reference="TXN-1", webhook_url=WEBHOOK_URL):
    client.initiate_payment(
        {"transaction_id": reference, "amount": 10000, "currency": "XOF"},
        SUCCESS_URL,
        CANCEL_URL,
        webhook_url,
    )


def test_resolve_dispatches_webhook_once(client, webhooks, clock):
    _initiate(client)
    clock.advance(60)

    client.resolve_payment("TXN-1", ResolutionOutcome.APPROVE)

    assert len(webhooks.deliveries) == 1
    delivery = webhooks.last()
    assert delivery.url == WEBHOOK_URL
    assert delivery.payload.to_dict() == {
        "transaction_ref": "TXN-1",
        "transaction_id": "TXN-1",
        "status": "completed",
        "amount": 10000.0,
        "currency": "XOF",
        "message": "Payment completed successfully",
        "timestamp": int(clock.now.timestamp()),
    }


def test_rejected_payment_webhook_reports_failed(client, webhooks):
    _initiate(client)
    client.resolve_payment("TXN-1", ResolutionOutcome.REJECT)

    assert webhooks.last().payload.status == "failed"
    assert webhooks.last().payload.message == "Payment failed"


def test_no_webhook_without_url(client, webhooks):
    _initiate(client, webhook_url=None)
    client.resolve_payment("TXN-1", ResolutionOutcome.APPROVE)

    assert webhooks.deliveries == []


def test_cancel_does_not_dispatch_webhook(client, webhooks):
    _initiate(client)
    client.cancel_payment("TXN-1")

    assert webhooks.deliveries == []


def test_failed_transition_does_not_dispatch(client, webhooks):
    _initiate(client)
    client.cancel_payment("TXN-1")

    with pytest.raises(InvalidStateError):
        client.resolve_payment("TXN-1", ResolutionOutcome.APPROVE)

    assert webhooks.deliveries == []


def test_build_webhook_payload_for_unknown_reference_is_none(client):
    assert client.build_webhook_payload("missing") is None


def test_build_webhook_payload_for_pending_uses_updated_at(client, clock):
    _initiate(client)
    created_ts = int(clock.now.timestamp())
    clock.advance(120)

    payload = client.build_webhook_payload("TXN-1")

    assert isinstance(payload, WebhookPayload)
    assert payload.status == "pending"
    assert payload.message == "Payment is pending"
    assert payload.timestamp == created_ts


def test_build_webhook_payload_prefers_completed_at(client, clock):
    _initiate(client)
    clock.advance(45)
    txn = client.resolve_payment("TXN-1", ResolutionOutcome.APPROVE)

    payload = client.build_webhook_payload("TXN-1")

    assert payload.timestamp == int(txn.completed_at.timestamp())
    assert payload.transaction_id == "TXN-1"


def test_trigger_webhook(client, webhooks):
    _initiate(client, "WITH-URL")
    _initiate(client, "NO-URL", webhook_url=None)

    assert client.trigger_webhook("missing") is False
    assert client.trigger_webhook("NO-URL") is False
    assert client.trigger_webhook("WITH-URL") is True

    assert [d.payload.transaction_ref for d in webhooks.deliveries] == ["WITH-URL"]
    assert webhooks.for_reference("WITH-URL")[0].payload.status == "pending"


def test_recording_dispatcher_clear():
    dispatcher = RecordingWebhookDispatcher()
    payload = WebhookPayload("T", "completed", 1.0, "XOF", "Payment completed successfully", 0)
    dispatcher.dispatch("https://x.test", payload)

    dispatcher.clear()

    assert dispatcher.deliveries == []
    assert dispatcher.last() is None


def test_default_dispatcher_logs_delivery(caplog):
    client = PaymentFakerClient()
    _initiate(client)

    with caplog.at_level(logging.INFO, logger="payment_faker.clients.webhooks"):
        client.resolve_payment("TXN-1", ResolutionOutcome.APPROVE)

    assert any("TXN-1" in r.getMessage() and WEBHOOK_URL in r.getMessage() for r in caplog.records)
