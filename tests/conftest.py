"""Pytest fixtures for the payment faker tests."""

from datetime import datetime, timedelta, timezone

import pytest

from payment_faker.clients.faker import PaymentFakerClient
from payment_faker.clients.webhooks import RecordingWebhookDispatcher
from payment_faker.contracts.interfaces import RandomSource


class ScriptedRandom(RandomSource):
    """Plays back fixed draws; tokens are numbered so they stay unique."""

    def __init__(self, draws=(), ints=()):
        self.draws = list(draws)
        self.ints = list(ints)
        self.int_calls = []
        self._tokens = 0

    def random(self):
        return self.draws.pop(0)

    def randint(self, low, high):
        self.int_calls.append((low, high))
        return self.ints.pop(0) if self.ints else low

    def token_hex(self, nbytes):
        self._tokens += 1
        return format(self._tokens, "x").rjust(nbytes * 2, "0")


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + timedelta(seconds=seconds)


class FakeSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def webhooks():
    return RecordingWebhookDispatcher()


@pytest.fixture
def random_source():
    return ScriptedRandom()


@pytest.fixture
def sleeper():
    return FakeSleep()


@pytest.fixture
def client(clock, webhooks, random_source, sleeper):
    return PaymentFakerClient(
        "test_api_key",
        "test_api_secret",
        clock=clock,
        webhook_dispatcher=webhooks,
        random_source=random_source,
        sleep=sleeper,
    )


@pytest.fixture
def payment_data():
    return {"transaction_id": "TXN-1", "amount": 10000, "currency": "XOF"}

