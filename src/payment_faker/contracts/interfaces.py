from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class ResolutionOutcome(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    USE_CONFIGURED_RATE = "use_configured_rate"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

def _epoch(moment: Optional[datetime]) -> Optional[int]:
    return int(moment.timestamp()) if moment is not None else None


@dataclass
class PaymentData:
    """Caller-side initiation payload. Validated by contracts.payments."""
    transaction_id: Optional[str] = None
    amount: Any = None
    currency: str = "XOF"
    description: str = "Payment"
    customer_name: str = "Test Customer"
    customer_email: Optional[str] = None
    customer_phone_number: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "PaymentData":
        return cls(
            transaction_id=data.get("transaction_id"),
            amount=data.get("amount"),
            currency=data.get("currency") or "XOF",
            description=data.get("description") or "Payment",
            customer_name=data.get("customer_name") or "Test Customer",
            customer_email=data.get("customer_email"),
            customer_phone_number=data.get("customer_phone_number"),
        )


@dataclass(frozen=True)
class Transaction:
    reference: str
    payment_token: str
    amount: float
    success_url: str
    cancel_url: str
    created_at: datetime
    updated_at: datetime
    currency: str = "XOF"
    description: str = "Payment"
    customer_name: str = "Test Customer"
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    webhook_url: Optional[str] = None
    status: TransactionStatus = TransactionStatus.PENDING
    completed_at: Optional[datetime] = None

    @property
    def transaction_id(self) -> str:
        return self.reference

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "transaction_ref": self.reference,
            "transaction_id": self.reference,
            "payment_token": self.payment_token,
            "amount": self.amount,
            "currency": self.currency,
            "description": self.description,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "webhook_url": self.webhook_url,
            "status": self.status.value,
            "created_at": _epoch(self.created_at),
            "updated_at": _epoch(self.updated_at),
        }
        if self.completed_at is not None:
            data["completed_at"] = _epoch(self.completed_at)
        return data


@dataclass(frozen=True)
class InitiationResult:
    transaction_ref: str
    payment_url: str
    payment_token: str
    status: str = "success"
    message: str = "Payment initiated successfully"
    code: str = "201"

    @property
    def transaction_id(self) -> str:
        return self.transaction_ref

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_ref": self.transaction_ref,
            "transaction_id": self.transaction_ref,
            "payment_url": self.payment_url,
            "payment_token": self.payment_token,
            "status": self.status,
            "message": self.message,
            "code": self.code,
        }


@dataclass(frozen=True)
class StatusResult:
    transaction_ref: str
    status: str                          # lower-case external status
    amount: float
    currency: str
    message: str
    data: Transaction

    @property
    def transaction_id(self) -> str:
        return self.transaction_ref

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_ref": self.transaction_ref,
            "transaction_id": self.transaction_ref,
            "status": self.status,
            "amount": self.amount,
            "currency": self.currency,
            "message": self.message,
            "data": self.data.to_dict(),
        }


@dataclass(frozen=True)
class WebhookPayload:
    transaction_ref: str
    status: str                          # lower-case external status
    amount: float
    currency: str
    message: str
    timestamp: int                       # epoch seconds

    @property
    def transaction_id(self) -> str:
        return self.transaction_ref

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_ref": self.transaction_ref,
            "transaction_id": self.transaction_ref,
            "status": self.status,
            "amount": self.amount,
            "currency": self.currency,
            "message": self.message,
            "timestamp": self.timestamp,
        }


# ---------------------------------------------------------------------------
# Abstract collaborators
# ---------------------------------------------------------------------------

class PaymentGateway(ABC):
    """Surface shared by the faker and any real redirect-checkout gateway client."""

    @abstractmethod
    def initiate_payment(
        self,
        payment_data: Any,
        success_url: str,
        cancel_url: str,
        webhook_url: Optional[str] = None,
    ) -> InitiationResult:
        """Register a payment and return the checkout redirect."""

    @abstractmethod
    def check_status(self, reference: str) -> StatusResult:
        """Report the current status of a previously initiated payment."""


class RandomSource(ABC):
    """Every source of randomness the simulator consumes goes through here."""

    @abstractmethod
    def random(self) -> float:
        """Uniform float in [0, 1)."""

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""

    @abstractmethod
    def token_hex(self, nbytes: int) -> str:
        """Hex encoding of ``nbytes`` random bytes."""


class WebhookDispatcher(ABC):
    """Delivers a webhook payload to a caller-registered URL."""

    @abstractmethod
    def dispatch(self, url: str, payload: WebhookPayload) -> None:
        """Hand the payload over for delivery."""
