"""
In-memory transaction store for the payment faker.

Holds frozen Transaction records keyed by reference. A single re-entrant lock
serialises every read and write, so a reader never sees a half-applied update
and two resolutions of the same reference cannot both observe PENDING.
Contents live for the lifetime of the store object only.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from payment_faker.contracts.interfaces import Transaction
from payment_faker.errors import NotFoundError

logger = logging.getLogger(__name__)


class TransactionStore:
    def __init__(self) -> None:
        # reference -> immutable record
        self._transactions: Dict[str, Transaction] = {}
        self._lock = threading.RLock()

    # --- Reads ----------------------------------------------------------------

    def get(self, reference: str) -> Optional[Transaction]:
        with self._lock:
            return self._transactions.get(reference)

    def require(self, reference: str) -> Transaction:
        transaction = self.get(reference)
        if transaction is None:
            raise NotFoundError(reference)
        return transaction

    def snapshot(self) -> Dict[str, Transaction]:
        with self._lock:
            return dict(self._transactions)

    def __contains__(self, reference: object) -> bool:
        with self._lock:
            return reference in self._transactions

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    # --- Writes ---------------------------------------------------------------

    def insert(self, transaction: Transaction, on_existing: Callable[[Transaction], None]) -> None:
        """
        Store a record, first calling ``on_existing`` with any record already
        held under the same reference. ``on_existing`` may raise to abort.
        """
        with self._lock:
            previous = self._transactions.get(transaction.reference)
            if previous is not None:
                on_existing(previous)
            self._transactions[transaction.reference] = transaction

    def update(self, reference: str, mutate: Callable[[Transaction], Transaction]) -> Transaction:
        """
        Replace the record under ``reference`` with ``mutate(record)`` atomically.

        Raises NotFoundError when the reference is unknown; anything ``mutate``
        raises propagates and leaves the record untouched.
        """
        with self._lock:
            current = self._transactions.get(reference)
            if current is None:
                raise NotFoundError(reference)
            updated = mutate(current)
            self._transactions[reference] = updated
            return updated

    def clear(self) -> int:
        with self._lock:
            count = len(self._transactions)
            self._transactions.clear()
        logger.debug("Transaction store cleared (%d records)", count)
        return count
