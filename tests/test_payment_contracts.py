from datetime import datetime, timezone

import pytest

from payment_faker.contracts.interfaces import InitiationResult, PaymentData, Transaction, TransactionStatus
from payment_faker.contracts.payments import (
    ALLOWED_TRANSITIONS,
    EXTERNAL_STATUS,
    STATUS_MESSAGES,
    assert_transition,
    external_status,
    is_terminal_status,
    status_message,
    validate_payment_data,
)
from payment_faker.errors import InvalidStateError, NotFoundError, ValidationError


def test_only_pending_has_outgoing_transitions():
    assert not is_terminal_status(TransactionStatus.PENDING)
    for status in (TransactionStatus.COMPLETED, TransactionStatus.FAILED, TransactionStatus.CANCELLED):
        assert is_terminal_status(status)
        assert ALLOWED_TRANSITIONS[status] == frozenset()


@pytest.mark.parametrize("target", list(TransactionStatus))
def test_terminal_states_reject_every_transition(target):
    for current in (TransactionStatus.COMPLETED, TransactionStatus.FAILED, TransactionStatus.CANCELLED):
        with pytest.raises(InvalidStateError) as exc_info:
            assert_transition("T", current, target)
        assert exc_info.value.details["current_status"] == current.value


def test_pending_cannot_transition_to_pending():
    with pytest.raises(InvalidStateError):
        assert_transition("T", TransactionStatus.PENDING, TransactionStatus.PENDING)


def test_status_tables_cover_every_status():
    assert {external_status(s) for s in TransactionStatus} == {"pending", "completed", "failed", "cancelled"}
    assert status_message(TransactionStatus.CANCELLED) == "Payment was cancelled"


def test_validate_payment_data_accepts_numeric_strings():
    assert validate_payment_data(PaymentData(transaction_id="T", amount="12.5")) == []


def test_validate_payment_data_rejects_booleans():
    assert validate_payment_data(PaymentData(transaction_id="T", amount=True)) == ["Invalid payment amount"]


def test_payment_data_from_mapping_fills_defaults():
    data = PaymentData.from_mapping({"transaction_id": "T", "amount": 1, "currency": None})

    assert data.currency == "XOF"
    assert data.description == "Payment"
    assert data.customer_name == "Test Customer"


def test_transaction_to_dict_uses_epoch_seconds():
    moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    txn = Transaction(
        reference="T",
        payment_token="tok",
        amount=1.0,
        success_url="s",
        cancel_url="c",
        created_at=moment,
        updated_at=moment,
    )

    data = txn.to_dict()

    assert data["transaction_id"] == "T"
    assert data["status"] == "PENDING"
    assert data["created_at"] == 1704067200
    assert "completed_at" not in data


def test_initiation_result_to_dict():
    result = InitiationResult(transaction_ref="T", payment_url="u", payment_token="tok")

    assert result.to_dict() == {
        "transaction_ref": "T",
        "transaction_id": "T",
        "payment_url": "u",
        "payment_token": "tok",
        "status": "success",
        "message": "Payment initiated successfully",
        "code": "201",
    }


def test_error_payloads():
    assert NotFoundError("X").to_dict()["code"] == "404"
    assert ValidationError("bad").to_dict()["error_code"] == "invalid_request"
    err = InvalidStateError("X", TransactionStatus.FAILED, TransactionStatus.CANCELLED)
    assert err.to_dict() == {
        "status": "error",
        "code": "409",
        "error_code": "invalid_state",
        "message": "Transaction is not in PENDING status",
        "details": {"transaction_ref": "X", "current_status": "FAILED", "requested_status": "CANCELLED"},
    }


@pytest.mark.parametrize("table", [ALLOWED_TRANSITIONS, EXTERNAL_STATUS, STATUS_MESSAGES])
def test_status_tables_are_keyed_by_every_status(table):
    assert set(table) == set(TransactionStatus)
