"""
Contracts (data models).

This folder defines the request/response shapes of the faker gateway:
- Payment initiation request and result
- Transaction record and status result
- Webhook payload sent to the caller-registered URL

Why this exists:
- Keeps the faker's responses shaped like a real redirect-checkout gateway
- Integration code relies on stable models, not on ad-hoc dicts
- The state-transition and status tables live in one place

Both the simulator and the service wrapper use these contracts.
"""
from .interfaces import (
    InitiationResult,
    PaymentData,
    PaymentGateway,
    RandomSource,
    ResolutionOutcome,
    StatusResult,
    Transaction,
    TransactionStatus,
    WebhookDispatcher,
    WebhookPayload,
)

__all__ = [
    "InitiationResult",
    "PaymentData",
    "PaymentGateway",
    "RandomSource",
    "ResolutionOutcome",
    "StatusResult",
    "Transaction",
    "TransactionStatus",
    "WebhookDispatcher",
    "WebhookPayload",
]
