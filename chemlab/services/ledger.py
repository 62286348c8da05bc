from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Iterable

from chemlab.app.core.errors import InsufficientStock, InvalidInput
from chemlab.app.models.core_types import TransactionType
from chemlab.app.models.inventory import Transaction, as_decimal, utcnow
from chemlab.services.chemicals import ChemicalStore

logger = logging.getLogger(__name__)


class TransactionLedger:
    """
    Append-only stock movement history; the only writer of stock changes.

    Rules:
        IN  : stock += quantity (no ceiling)
        OUT : rejected if stock == 0 or quantity > stock, never partial

    Transactions are frozen once created. There is no update or delete.
    """

    def __init__(self, store: ChemicalStore, transactions: Iterable[Transaction] = ()):
        self._store = store
        self._transactions: list[Transaction] = list(transactions)
        self._append_lock = threading.Lock()

    def record_transaction(
        self,
        chemical_id: str,
        tx_type: TransactionType,
        quantity: Decimal | int | float,
        user: str,
        reason: str | None = None,
    ) -> Transaction:
        try:
            tx_type = TransactionType(tx_type)
        except ValueError:
            raise InvalidInput(f"Unknown transaction type {tx_type!r} (expected IN or OUT)") from None
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float, Decimal)):
            raise InvalidInput(f"Quantity must be a number (got {quantity!r})")
        quantity = as_decimal(quantity)
        if not quantity.is_finite() or quantity <= 0:
            raise InvalidInput(f"Quantity must be greater than 0 (got {quantity})")
        if not isinstance(user, str) or not user.strip():
            raise InvalidInput("User is required")

        # validate -> compute -> apply -> append, as one critical section
        with self._store.lock_for(chemical_id):
            chem = self._store.get(chemical_id)

            if tx_type == TransactionType.stock_in:
                new_stock = chem.current_stock + quantity
            else:
                if chem.current_stock <= 0:
                    raise InsufficientStock(available=chem.current_stock)
                if quantity > chem.current_stock:
                    raise InsufficientStock(available=chem.current_stock)
                # floor is unreachable after the checks above
                new_stock = max(Decimal(0), chem.current_stock - quantity)

            now = utcnow()
            tx = Transaction(
                chemical_id=chem.id,
                chemical_name=chem.name,
                type=tx_type,
                quantity=quantity,
                date=now,
                user=user,
                reason=reason or None,
            )

            self._store.apply_stock(chem.id, new_stock, now)
            with self._append_lock:
                self._transactions.insert(0, tx)

        logger.info(
            "transaction %s %s qty=%g chemical=%s stock=%g->%g user=%s",
            tx.id,
            tx_type.value,
            quantity,
            chem.id,
            chem.current_stock,
            new_stock,
            user,
        )
        return tx

    def list_transactions(self) -> list[Transaction]:
        """Newest first. Insertion order is not trusted to be chronological."""
        with self._append_lock:
            snapshot = list(self._transactions)
        return sorted(snapshot, key=lambda t: t.date, reverse=True)

    def for_chemical(self, chemical_id: str) -> list[Transaction]:
        return [t for t in self.list_transactions() if t.chemical_id == chemical_id]

    def __len__(self) -> int:
        return len(self._transactions)
