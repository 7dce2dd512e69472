"""
Payment Faker: in-process gateway simulator.

⚠️  This client never talks to a network. It stands in for a redirect-checkout
    gateway (MyCoolPay / CinetPay style) so integration code can be exercised
    end-to-end: initiate a payment, send the user to a checkout URL, resolve
    the payment by hand or by a configured success rate, poll its status and
    receive a webhook-shaped notification.

Every transaction moves through a one-way state machine:

    PENDING -> COMPLETED | FAILED | CANCELLED

Terminal states are final; any further resolve/cancel raises InvalidStateError.
"""

import logging
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from payment_faker.clients.randomness import SystemRandomSource
from payment_faker.clients.store import TransactionStore
from payment_faker.clients.webhooks import LoggingWebhookDispatcher
from payment_faker.contracts.interfaces import (
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
from payment_faker.contracts.payments import (
    SETTLED_STATUSES,
    assert_transition,
    coerce_amount,
    external_status,
    is_terminal_status,
    status_message,
    validate_payment_data,
)
from payment_faker.errors import InvalidStateError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://faker.payment.test"
FAKER_HOST = "faker.payment.test"
TOKEN_BYTES = 16


def _clamp_rate(rate: float) -> float:
    return max(0.0, min(1.0, float(rate)))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentFakerClient(PaymentGateway):
    """
    Fake payment provider for tests and local development.

    Parameters
    ----------
    api_key, api_secret : str
        Accepted for signature parity with real gateway clients; never checked.
    base_url : str
        Host the checkout URL is built on. Trailing slashes are stripped.
    simulate_delays : bool
        If True, initiate_payment and check_status sleep for a random
        duration between delay_min_ms and delay_max_ms.
    success_rate : float
        Probability (0–1) that a rate-based resolution approves. Clamped.
    checkout_path : str, optional
        Overrides the checkout path. By default ``/payment/checkout`` on the
        faker host and ``/payment-faker/checkout`` on any other host.
    allow_overwrite : bool
        If False, initiating an existing reference raises ValidationError
        instead of replacing the stored transaction.
    store, random_source, webhook_dispatcher, clock, sleep
        Injectable collaborators; defaults are a fresh TransactionStore,
        SystemRandomSource, LoggingWebhookDispatcher, UTC wall clock and
        time.sleep.
    """

    def __init__(
        self,
        api_key: str = "test_api_key",
        api_secret: str = "test_api_secret",
        base_url: str = DEFAULT_BASE_URL,
        simulate_delays: bool = False,
        success_rate: float = 1.0,
        delay_min_ms: int = 100,
        delay_max_ms: int = 500,
        checkout_path: Optional[str] = None,
        allow_overwrite: bool = True,
        store: Optional[TransactionStore] = None,
        random_source: Optional[RandomSource] = None,
        webhook_dispatcher: Optional[WebhookDispatcher] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self._api_key = api_key
        self._api_secret = api_secret
        self._base_url = base_url.rstrip("/")
        self._checkout_path = checkout_path or (
            "/payment/checkout" if FAKER_HOST in self._base_url else "/payment-faker/checkout"
        )
        self._allow_overwrite = allow_overwrite
        self._success_rate = _clamp_rate(success_rate)
        self._simulate_delays = False
        self._delay_min_ms = 0
        self._delay_max_ms = 0
        self.configure_delays(simulate_delays, delay_min_ms, delay_max_ms)

        self._store = store if store is not None else TransactionStore()
        self._random = random_source or SystemRandomSource()
        self._webhooks = webhook_dispatcher or LoggingWebhookDispatcher()
        self._clock = clock or _utcnow
        self._sleep = sleep or time.sleep

        logger.info(
            "[FAKER] Client initialised (base_url=%s, success_rate=%.0f%%, delays=%s)",
            self._base_url, self._success_rate * 100, self._simulate_delays,
        )

    # ------------------------------------------------------------------
    # Configuration surface
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def checkout_path(self) -> str:
        return self._checkout_path

    @property
    def store(self) -> TransactionStore:
        return self._store

    @property
    def success_rate(self) -> float:
        return self._success_rate

    @success_rate.setter
    def success_rate(self, rate: float) -> None:
        self.set_success_rate(rate)

    def set_success_rate(self, rate: float) -> None:
        self._success_rate = _clamp_rate(rate)
        logger.info("[FAKER] Success rate set to %.0f%%", self._success_rate * 100)

    def get_success_rate(self) -> float:
        return self._success_rate

    @property
    def simulate_delays(self) -> bool:
        return self._simulate_delays

    @property
    def delay_bounds_ms(self) -> Tuple[int, int]:
        return self._delay_min_ms, self._delay_max_ms

    def configure_delays(
        self,
        enabled: bool,
        min_ms: Optional[int] = None,
        max_ms: Optional[int] = None,
    ) -> None:
        low = self._delay_min_ms if min_ms is None else int(min_ms)
        high = self._delay_max_ms if max_ms is None else int(max_ms)
        if low < 0 or high < 0:
            raise ValueError(f"Delay bounds must be non-negative; got {low}..{high} ms.")
        if low > high:
            raise ValueError(f"delay_min_ms ({low}) must not exceed delay_max_ms ({high}).")
        self._simulate_delays = bool(enabled)
        self._delay_min_ms = low
        self._delay_max_ms = high

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _simulate_delay(self, operation: str) -> None:
        if not self._simulate_delays:
            return
        delay_ms = self._random.randint(self._delay_min_ms, self._delay_max_ms)
        logger.debug("[FAKER] Simulating %d ms of network latency for %s", delay_ms, operation)
        self._sleep(delay_ms / 1000.0)

    def _should_approve(self, outcome: ResolutionOutcome) -> bool:
        if outcome is ResolutionOutcome.APPROVE:
            return True
        if outcome is ResolutionOutcome.REJECT:
            return False
        draw = self._random.random()
        return self._success_rate > 0.0 and draw <= self._success_rate

    def _payment_url(self, token: str) -> str:
        return f"{self._base_url}{self._checkout_path}?token={token}"

    def _transition(self, reference: str, decide: Callable[[], TransactionStatus]) -> Transaction:
        def apply(current: Transaction) -> Transaction:
            if is_terminal_status(current.status):
                raise InvalidStateError(reference, current.status)
            new_status = decide()
            assert_transition(reference, current.status, new_status)
            now = self._clock()
            changes: Dict[str, Any] = {"status": new_status, "updated_at": now}
            if new_status in SETTLED_STATUSES:
                changes["completed_at"] = now
            return replace(current, **changes)

        return self._store.update(reference, apply)

    def _payload_for(self, transaction: Transaction) -> WebhookPayload:
        moment = transaction.completed_at or transaction.updated_at or self._clock()
        return WebhookPayload(
            transaction_ref=transaction.reference,
            status=external_status(transaction.status),
            amount=transaction.amount,
            currency=transaction.currency,
            message=status_message(transaction.status),
            timestamp=int(moment.timestamp()),
        )

    def _dispatch_webhook(self, transaction: Transaction) -> None:
        payload = self._payload_for(transaction)
        self._webhooks.dispatch(transaction.webhook_url, payload)

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def initiate_payment(
        self,
        payment_data: Union[PaymentData, Mapping[str, Any]],
        success_url: str,
        cancel_url: str,
        webhook_url: Optional[str] = None,
    ) -> InitiationResult:
        self._simulate_delay("initiate_payment")

        data = payment_data if isinstance(payment_data, PaymentData) else PaymentData.from_mapping(payment_data)
        errors = validate_payment_data(data)
        if errors:
            logger.info("[FAKER] Rejected initiation: %s", "; ".join(errors))
            raise ValidationError(errors[0], {"errors": errors})

        reference = str(data.transaction_id)
        token = self._random.token_hex(TOKEN_BYTES)
        now = self._clock()
        transaction = Transaction(
            reference=reference,
            payment_token=token,
            amount=coerce_amount(data.amount),
            success_url=success_url,
            cancel_url=cancel_url,
            created_at=now,
            updated_at=now,
            currency=data.currency,
            description=data.description,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone_number,
            webhook_url=webhook_url,
        )

        def on_existing(previous: Transaction) -> None:
            if not self._allow_overwrite:
                raise ValidationError("duplicate transaction id", {"transaction_ref": reference})
            logger.warning(
                "[FAKER] Overwriting transaction %s (was %s)", reference, previous.status.value
            )

        self._store.insert(transaction, on_existing)
        logger.info(
            "[FAKER] Payment initiated ref=%s amount=%s %s", reference, transaction.amount, transaction.currency
        )
        return InitiationResult(
            transaction_ref=reference,
            payment_url=self._payment_url(token),
            payment_token=token,
        )

    def resolve_payment(
        self,
        reference: str,
        outcome: ResolutionOutcome = ResolutionOutcome.USE_CONFIGURED_RATE,
    ) -> Transaction:
        outcome = ResolutionOutcome(outcome)

        def decide() -> TransactionStatus:
            # Drawn only once the record is known to be PENDING.
            approve = self._should_approve(outcome)
            return TransactionStatus.COMPLETED if approve else TransactionStatus.FAILED

        transaction = self._transition(reference, decide)
        logger.info("[FAKER] Payment %s -> %s (%s)", reference, transaction.status.value, outcome.value)

        if transaction.webhook_url:
            self._dispatch_webhook(transaction)
        return transaction

    def approve_payment(self, reference: str, approve: Optional[bool] = None) -> Transaction:
        """Resolve with an explicit verdict, or by the success rate when ``approve`` is None."""
        if approve is None:
            outcome = ResolutionOutcome.USE_CONFIGURED_RATE
        else:
            outcome = ResolutionOutcome.APPROVE if approve else ResolutionOutcome.REJECT
        return self.resolve_payment(reference, outcome)

    def reject_payment(self, reference: str) -> Transaction:
        return self.resolve_payment(reference, ResolutionOutcome.REJECT)

    def cancel_payment(self, reference: str) -> Transaction:
        transaction = self._transition(reference, lambda: TransactionStatus.CANCELLED)
        logger.info("[FAKER] Payment %s cancelled", reference)
        return transaction

    def check_status(self, reference: str) -> StatusResult:
        self._simulate_delay("check_status")
        transaction = self._store.require(reference)
        return StatusResult(
            transaction_ref=reference,
            status=external_status(transaction.status),
            amount=transaction.amount,
            currency=transaction.currency,
            message=status_message(transaction.status),
            data=transaction,
        )

    # ------------------------------------------------------------------
    # Inspection (tests / debugging)
    # ------------------------------------------------------------------

    def get_transaction(self, reference: str) -> Transaction:
        return self._store.require(reference)

    def list_transactions(self) -> Dict[str, Transaction]:
        return self._store.snapshot()

    def clear_transactions(self) -> None:
        count = self._store.clear()
        logger.info("[FAKER] Cleared %d transaction(s)", count)

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    def build_webhook_payload(self, reference: str) -> Optional[WebhookPayload]:
        transaction = self._store.get(reference)
        if transaction is None:
            return None
        return self._payload_for(transaction)

    def trigger_webhook(self, reference: str) -> bool:
        """Re-send the webhook for a transaction. False if unknown or no URL registered."""
        transaction = self._store.get(reference)
        if transaction is None or not transaction.webhook_url:
            return False
        self._dispatch_webhook(transaction)
        return True
