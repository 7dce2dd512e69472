"""
payment_faker: an in-process fake of a redirect-checkout payment gateway.
"""
from .clients import (
    LoggingWebhookDispatcher,
    PaymentFakerClient,
    RecordingWebhookDispatcher,
    SeededRandomSource,
    SystemRandomSource,
    TransactionStore,
)
from .contracts import (
    InitiationResult,
    PaymentData,
    ResolutionOutcome,
    StatusResult,
    Transaction,
    TransactionStatus,
    WebhookPayload,
)
from .errors import InvalidStateError, NotFoundError, PaymentFakerError, ValidationError
from .service import PaymentFakerService

__all__ = [
    "InitiationResult",
    "InvalidStateError",
    "LoggingWebhookDispatcher",
    "NotFoundError",
    "PaymentData",
    "PaymentFakerClient",
    "PaymentFakerError",
    "PaymentFakerService",
    "RecordingWebhookDispatcher",
    "ResolutionOutcome",
    "SeededRandomSource",
    "StatusResult",
    "SystemRandomSource",
    "Transaction",
    "TransactionStatus",
    "TransactionStore",
    "ValidationError",
    "WebhookPayload",
]
