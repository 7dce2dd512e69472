"""
Payment Faker Service.

Purpose:
- Gives application code the same thin service surface it would use for a
  real gateway (initiate, check status, handle webhook)
- Owns one PaymentFakerClient; tests reach the client for manual resolution

Usage:
    service = PaymentFakerService.from_config(load_faker_config())
    result = service.initiate_payment({...}, success_url, cancel_url)
    service.client.approve_payment(result.transaction_ref, True)

Swap:
Replace this service with the real gateway service once credentials exist;
the initiate/check_status/handle_webhook signatures are the same.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from payment_faker.clients.faker import DEFAULT_BASE_URL, PaymentFakerClient
from payment_faker.contracts.interfaces import InitiationResult, PaymentData, StatusResult
from payment_faker.response_wrappers import IntegrationResponseError, normalize_webhook_notification
from payment_faker.utils.config_loader import FakerConfig

logger = logging.getLogger(__name__)


class PaymentFakerService:
    """
    Thin service wrapper around one PaymentFakerClient.

    Either pass a ready-made ``client`` or the settings to build one, not both:
    settings given alongside ``client`` raise ValueError instead of being dropped.
    """

    def __init__(
        self,
        api_key: str = "test_api_key",
        api_secret: str = "test_api_secret",
        base_url: str = DEFAULT_BASE_URL,
        simulate_delays: bool = False,
        success_rate: float = 1.0,
        client: Optional[PaymentFakerClient] = None,
        **client_options: Any,
    ) -> None:
        if client is not None:
            overridden = sorted(client_options)
            if (api_key, api_secret) != ("test_api_key", "test_api_secret"):
                overridden.append("credentials")
            if base_url != DEFAULT_BASE_URL:
                overridden.append("base_url")
            if simulate_delays:
                overridden.append("simulate_delays")
            if success_rate != 1.0:
                overridden.append("success_rate")
            if overridden:
                raise ValueError(
                    f"Client settings cannot be combined with an explicit client: {', '.join(overridden)}"
                )
            self._client = client
            return
        self._client = PaymentFakerClient(
            api_key,
            api_secret,
            base_url,
            simulate_delays,
            success_rate,
            **client_options,
        )

    @classmethod
    def from_config(cls, config: FakerConfig, **client_options: Any) -> "PaymentFakerService":
        return cls(
            api_key=config.api_key,
            api_secret=config.api_secret,
            base_url=config.base_url,
            simulate_delays=config.simulate_delays,
            success_rate=config.success_rate,
            delay_min_ms=config.delay_min_ms,
            delay_max_ms=config.delay_max_ms,
            checkout_path=config.checkout_path,
            allow_overwrite=config.allow_overwrite,
            **client_options,
        )

    @property
    def client(self) -> PaymentFakerClient:
        return self._client

    def get_client(self) -> PaymentFakerClient:
        return self._client

    def initiate_payment(
        self,
        payment_data: Union[PaymentData, Mapping[str, Any]],
        success_url: str,
        cancel_url: str,
        webhook_url: Optional[str] = None,
    ) -> InitiationResult:
        return self._client.initiate_payment(payment_data, success_url, cancel_url, webhook_url)

    def check_status(self, transaction_ref: str) -> StatusResult:
        return self._client.check_status(transaction_ref)

    def handle_webhook(self, payload: Dict[str, Any]) -> bool:
        """
        Accept a webhook body. A real gateway service would verify a signature
        here; the faker only requires a transaction reference.
        """
        if not isinstance(payload, dict):
            logger.warning("[FAKER] Rejected webhook: payload is %s", type(payload).__name__)
            return False
        if not (payload.get("transaction_ref") or payload.get("transaction_id")):
            logger.warning("[FAKER] Rejected webhook: no transaction reference")
            return False

        try:
            notification = normalize_webhook_notification(payload)
        except IntegrationResponseError as exc:
            # Only a reference is required; the rest is informational.
            logger.info("[FAKER] Webhook accepted with unparsed body: %s", exc)
            return True

        logger.info(
            "[FAKER] Webhook received ref=%s status=%s",
            notification.transaction_ref,
            notification.status.value,
        )
        return True
