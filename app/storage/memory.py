"""In-memory storage for processed payments.

A dict keyed by payment id behind a lock. All data lives in memory and is
lost on restart.
"""

import threading
from typing import Dict, Optional
from uuid import UUID

from app.models import PaymentRecord

_NIL_ID = UUID(int=0)


class PaymentsRepository:
    """Thread-safe in-memory store of payment records."""

    def __init__(self) -> None:
        self._payments: Dict[UUID, PaymentRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: PaymentRecord) -> bool:
        """Store a record unless its id is already taken.

        Returns True if the record was inserted, False if an entry with the
        same id already existed (that entry is left untouched).
        """
        if record is None:
            raise ValueError("record must not be None")
        with self._lock:
            if record.id in self._payments:
                return False
            self._payments[record.id] = record
            return True

    def get(self, payment_id: Optional[UUID]) -> Optional[PaymentRecord]:
        """Return the record for an id, or None. The nil UUID never matches."""
        if payment_id is None or payment_id == _NIL_ID:
            return None
        with self._lock:
            return self._payments.get(payment_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._payments)
