"""
Simulator clients.

These return realistic gateway responses without calling any external API.
They are used when:
- integration code needs a payment provider in unit or end-to-end tests
- a developer wants to click through checkout without real money

Important:
- The faker follows the same PaymentGateway interface a real client would.
- Responses are shaped according to payment_faker.contracts.*
"""
from .faker import PaymentFakerClient
from .randomness import SeededRandomSource, SystemRandomSource
from .store import TransactionStore
from .webhooks import LoggingWebhookDispatcher, RecordingWebhookDispatcher, WebhookDelivery

__all__ = [
    "LoggingWebhookDispatcher",
    "PaymentFakerClient",
    "RecordingWebhookDispatcher",
    "SeededRandomSource",
    "SystemRandomSource",
    "TransactionStore",
    "WebhookDelivery",
]
