"""
Random sources for the payment faker.

The simulator draws randomness in three places: the checkout token, the
success-rate draw and the simulated latency. All three go through a
RandomSource so a test can pin them down.
"""

from __future__ import annotations

import random
import secrets
from typing import Optional

from payment_faker.contracts.interfaces import RandomSource


class SystemRandomSource(RandomSource):
    """Default source: OS entropy for tokens, a private PRNG for draws."""

    def __init__(self) -> None:
        self._rng = random.Random()

    def random(self) -> float:
        return self._rng.random()

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def token_hex(self, nbytes: int) -> str:
        return secrets.token_hex(nbytes)


class SeededRandomSource(RandomSource):
    """
    Reproducible source. Two instances built with the same seed produce the
    same tokens, draws and delays in the same order.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def token_hex(self, nbytes: int) -> str:
        return self._rng.getrandbits(nbytes * 8).to_bytes(nbytes, "big").hex()
