from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from payment_faker.contracts.interfaces import TransactionStatus

_MISSING = object()


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class WebhookNotificationModel(BaseModel):
    transaction_ref: str
    status: TransactionStatus
    amount: Optional[float] = None
    currency: str = "XOF"
    message: Optional[str] = None
    timestamp: Optional[datetime] = None
    raw: Dict[str, Any] = Field(default_factory=dict)


def normalize_webhook_notification(raw: Dict[str, Any]) -> WebhookNotificationModel:
    """
    Normalize a webhook body (ours or a look-alike gateway's) into one model.

    Raises IntegrationResponseError when the reference or status is missing,
    the status is unknown, or the amount/timestamp cannot be parsed.
    """
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Webhook payload must be an object; got {type(raw).__name__}.")

    reference = str(_first_non_empty(raw, "transaction_ref", "transaction_id", "reference"))
    status = _map_transaction_status(_first_non_empty(raw, "status", "payment_status"))
    amount_raw = _first_non_empty(raw, "amount", default=_MISSING)
    amount = None if amount_raw is _MISSING else _coerce_positive_amount(amount_raw, "webhook amount")
    currency = str(_first_non_empty(raw, "currency", default="XOF")).upper()
    message = _first_non_empty(raw, "message", "detail", default=_MISSING)
    timestamp_raw = _first_non_empty(raw, "timestamp", "completed_at", "updated_at", default=_MISSING)

    return _build_model(
        WebhookNotificationModel,
        {
            "transaction_ref": reference,
            "status": status,
            "amount": amount,
            "currency": currency,
            "message": None if message is _MISSING else str(message),
            "timestamp": None if timestamp_raw is _MISSING else _coerce_timestamp(timestamp_raw),
            "raw": raw,
        },
        raw,
    )


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _coerce_positive_amount(value: Any, label: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise IntegrationResponseError(f"Invalid {label}: {value!r}") from exc
    if amount <= 0:
        raise IntegrationResponseError(f"{label.capitalize()} must be > 0; got {amount}.")
    return amount


def _coerce_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise IntegrationResponseError(f"Invalid webhook timestamp: {value!r}") from exc


def _map_transaction_status(raw_status: Any) -> TransactionStatus:
    value = str(raw_status or "").strip().upper()
    mapping = {
        "PENDING": TransactionStatus.PENDING,
        "PROCESSING": TransactionStatus.PENDING,
        "COMPLETED": TransactionStatus.COMPLETED,
        "SUCCESS": TransactionStatus.COMPLETED,
        "FAILED": TransactionStatus.FAILED,
        "ERROR": TransactionStatus.FAILED,
        "CANCELLED": TransactionStatus.CANCELLED,
        "CANCELED": TransactionStatus.CANCELLED,
    }
    if value not in mapping:
        raise IntegrationResponseError(f"Unsupported payment status '{value}'.")
    return mapping[value]


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Webhook validation failed: {exc}", payload=raw) from exc
