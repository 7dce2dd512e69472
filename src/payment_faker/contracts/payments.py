"""
Payment contract: state-transition table, external status tables and
validation helpers for the redirect-checkout flow.

Both the simulator and the inbound webhook normalizer read these tables, so the
status strings a caller sees are the same whichever side produced them.
"""
from typing import Any, Dict, FrozenSet, List

from .interfaces import PaymentData, TransactionStatus
from ..errors import InvalidStateError

# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

ALLOWED_TRANSITIONS: Dict[TransactionStatus, FrozenSet[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset(
        {TransactionStatus.COMPLETED, TransactionStatus.FAILED, TransactionStatus.CANCELLED}
    ),
    TransactionStatus.COMPLETED: frozenset(),
    TransactionStatus.FAILED: frozenset(),
    TransactionStatus.CANCELLED: frozenset(),
}

# completed_at is stamped only when entering one of these
SETTLED_STATUSES: FrozenSet[TransactionStatus] = frozenset(
    {TransactionStatus.COMPLETED, TransactionStatus.FAILED}
)

# ---------------------------------------------------------------------------
# External representation
# ---------------------------------------------------------------------------

EXTERNAL_STATUS: Dict[TransactionStatus, str] = {
    TransactionStatus.PENDING: "pending",
    TransactionStatus.COMPLETED: "completed",
    TransactionStatus.FAILED: "failed",
    TransactionStatus.CANCELLED: "cancelled",
}

STATUS_MESSAGES: Dict[TransactionStatus, str] = {
    TransactionStatus.PENDING: "Payment is pending",
    TransactionStatus.COMPLETED: "Payment completed successfully",
    TransactionStatus.FAILED: "Payment failed",
    TransactionStatus.CANCELLED: "Payment was cancelled",
}

for _table in (ALLOWED_TRANSITIONS, EXTERNAL_STATUS, STATUS_MESSAGES):
    if set(_table) != set(TransactionStatus):
        raise RuntimeError(f"Status table is not exhaustive: missing {set(TransactionStatus) - set(_table)}")


def external_status(status: TransactionStatus) -> str:
    return EXTERNAL_STATUS[status]


def status_message(status: TransactionStatus) -> str:
    return STATUS_MESSAGES[status]


def is_terminal_status(status: TransactionStatus) -> bool:
    """Return True if the payment has reached a final, non-changeable state."""
    return not ALLOWED_TRANSITIONS[status]


def assert_transition(reference: str, current: TransactionStatus, new: TransactionStatus) -> None:
    if new not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStateError(reference, current, new)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def coerce_amount(value: Any) -> float:
    """Parse an amount, raising ValueError when it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"not an amount: {value!r}")
    if isinstance(value, str) and not value.strip():
        raise ValueError("empty amount")
    return float(value)


def validate_payment_data(data: PaymentData) -> List[str]:
    """
    Return a list of validation errors, amount problems first.
    Empty list means the request is valid.
    """
    errors: List[str] = []

    try:
        amount = coerce_amount(data.amount)
    except (TypeError, ValueError):
        amount = None
    if amount is None or not amount > 0:
        errors.append("Invalid payment amount")

    if not data.transaction_id or not str(data.transaction_id).strip():
        errors.append("transaction_id is required")

    return errors
