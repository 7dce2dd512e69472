"""
Webhook delivery collaborators.

The faker only builds webhook payloads. Delivering them is the job of a
WebhookDispatcher. The two bundled here never touch the network:

- LoggingWebhookDispatcher: default, logs what would have been POSTed
- RecordingWebhookDispatcher: keeps every delivery in memory for assertions

Applications that need real delivery plug in their own dispatcher.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from payment_faker.contracts.interfaces import WebhookDispatcher, WebhookPayload

logger = logging.getLogger(__name__)


class LoggingWebhookDispatcher(WebhookDispatcher):
    def dispatch(self, url: str, payload: WebhookPayload) -> None:
        logger.info("[FAKER] Webhook for %s -> %s (status=%s)", payload.transaction_ref, url, payload.status)
        logger.debug("[FAKER] Webhook body: %s", json.dumps(payload.to_dict(), sort_keys=True))


@dataclass(frozen=True)
class WebhookDelivery:
    url: str
    payload: WebhookPayload


class RecordingWebhookDispatcher(WebhookDispatcher):
    def __init__(self) -> None:
        self._deliveries: List[WebhookDelivery] = []
        self._lock = threading.Lock()

    def dispatch(self, url: str, payload: WebhookPayload) -> None:
        with self._lock:
            self._deliveries.append(WebhookDelivery(url=url, payload=payload))

    @property
    def deliveries(self) -> List[WebhookDelivery]:
        with self._lock:
            return list(self._deliveries)

    def for_reference(self, reference: str) -> List[WebhookDelivery]:
        return [d for d in self.deliveries if d.payload.transaction_ref == reference]

    def last(self) -> Optional[WebhookDelivery]:
        deliveries = self.deliveries
        return deliveries[-1] if deliveries else None

    def clear(self) -> None:
        with self._lock:
            self._deliveries.clear()
