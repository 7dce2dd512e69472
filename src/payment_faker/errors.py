"""
Payment faker exception hierarchy.

Every error carries a stable machine-readable code plus the HTTP-like status a
real gateway would answer with, so integration code can map faker failures the
same way it maps live gateway failures.
"""
from typing import Any, Dict, Optional


class PaymentFakerError(Exception):
    """Base exception for all simulator errors."""

    code = "faker_error"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a gateway-style error response."""
        return {
            "status": "error",
            "code": str(self.http_status),
            "error_code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(PaymentFakerError):
    """
    Initiation request is malformed.

    Examples:
    - amount missing, zero or negative
    - transaction_id missing
    - duplicate transaction_id when overwrites are disabled
    """

    code = "invalid_request"
    http_status = 400


class NotFoundError(PaymentFakerError):
    """No transaction is stored under the given reference."""

    code = "transaction_not_found"
    http_status = 404

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Transaction not found: {reference}", {"transaction_ref": reference})


class InvalidStateError(PaymentFakerError):
    """The transaction already left PENDING and cannot be resolved or cancelled."""

    code = "invalid_state"
    http_status = 409

    def __init__(self, reference: str, current_status: Any, requested_status: Any = None):
        self.reference = reference
        self.current_status = current_status
        self.requested_status = requested_status
        details = {
            "transaction_ref": reference,
            "current_status": str(getattr(current_status, "value", current_status)),
        }
        if requested_status is not None:
            details["requested_status"] = str(getattr(requested_status, "value", requested_status))
        super().__init__("Transaction is not in PENDING status", details)
