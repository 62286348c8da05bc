"""
Chemical record store.

Holds the current state of every chemical in insertion order. That order is
the canonical iteration order for the reorder calculator and the dashboard.

Stock (``current_stock``) is written by two paths only:
    - the ledger, through ``apply_stock`` (see ``chemlab.services.ledger``)
    - an explicit full-record edit, through ``update``

Records handed out are copies: mutating one never changes the store.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from chemlab.app.core.errors import InvalidInput, InvalidLevel, NotFound
from chemlab.app.models.core_types import UNIT_LEVELS
from chemlab.app.models.inventory import (
    ChemicalDraft,
    ChemicalRecord,
    as_decimal,
    new_id,
    utcnow,
)

logger = logging.getLogger(__name__)


def _validate(entry: ChemicalDraft) -> None:
    if not entry.name or not entry.name.strip():
        raise InvalidInput("Chemical name is required")

    for field in ("current_stock", "min_level", "target_level"):
        value = as_decimal(getattr(entry, field))
        if not value.is_finite() or value < 0:
            raise InvalidInput(f"{field} must be a non-negative number (got {value})")

    for unit in entry.units_in_use:
        if unit.remaining not in UNIT_LEVELS:
            raise InvalidLevel(unit.remaining)

    # min_level <= target_level is not enforced: an inverted configuration
    # is accepted and yields a negative suggested quantity at reorder time.


class ChemicalStore:
    def __init__(self, records: Iterable[ChemicalRecord] = ()):
        self._records: dict[str, ChemicalRecord] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

        for r in records:
            _validate(r)
            if r.id in self._records:
                raise InvalidInput(f"Duplicate chemical id {r.id}")
            self._records[r.id] = r.model_copy(deep=True)
            self._locks[r.id] = threading.RLock()

    # ---------- Locking ----------
    def lock_for(self, chemical_id: str) -> threading.RLock:
        """
        Critical section for one chemical.

        Validation and mutation of a chemical's stock must happen under
        this lock, otherwise two OUT requests validated against the same
        stale stock could both succeed.

        Locks exist only for stored chemicals (created by ``__init__`` and
        ``add``); an unknown id raises ``NotFound`` and leaves nothing behind.
        """
        with self._guard:
            lock = self._locks.get(chemical_id)
        if lock is None:
            raise NotFound(f"Chemical not found (id={chemical_id})")
        return lock

    # ---------- Reads ----------
    def _require(self, chemical_id: str) -> ChemicalRecord:
        record = self._records.get(chemical_id)
        if record is None:
            raise NotFound(f"Chemical not found (id={chemical_id})")
        return record

    def get(self, chemical_id: str) -> ChemicalRecord:
        return self._require(chemical_id).model_copy(deep=True)

    def list(self) -> list[ChemicalRecord]:
        with self._guard:
            records = list(self._records.values())
        return [r.model_copy(deep=True) for r in records]

    def __contains__(self, chemical_id: object) -> bool:
        return chemical_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    # ---------- Writes ----------
    def add(self, draft: ChemicalDraft) -> ChemicalRecord:
        if isinstance(draft, ChemicalRecord):
            raise InvalidInput("Record already has an id; use update()")
        _validate(draft)

        record = ChemicalRecord(
            **draft.model_dump(exclude={"units_in_use"}),
            units_in_use=[u.model_copy() for u in draft.units_in_use],
            id=new_id(),
            last_updated=utcnow(),
        )
        with self._guard:
            self._records[record.id] = record
            self._locks[record.id] = threading.RLock()

        logger.debug("chemical added id=%s name=%s", record.id, record.name)
        return record.model_copy(deep=True)

    def update(self, record: ChemicalRecord) -> ChemicalRecord:
        """Full replace of every field except ``id``; stamps ``last_updated``."""
        if not isinstance(record, ChemicalRecord):
            raise InvalidInput("Draft has no id; use add()")
        _validate(record)

        with self.lock_for(record.id):
            self._require(record.id)
            # revalidated, so fields set through model_copy(update=...) are coerced too
            stored = ChemicalRecord(**{**record.model_dump(), "last_updated": utcnow()})
            with self._guard:
                self._records[record.id] = stored

        logger.debug("chemical updated id=%s", record.id)
        return stored.model_copy(deep=True)

    def apply_stock(self, chemical_id: str, new_stock: Decimal, at: datetime) -> None:
        """
        Stock write used by the ledger.

        Caller must hold ``lock_for(chemical_id)`` and have validated the
        movement; this only swaps the stored value.
        """
        current = self._require(chemical_id)
        updated = current.model_copy(update={"current_stock": new_stock, "last_updated": at})
        with self._guard:
            self._records[chemical_id] = updated
