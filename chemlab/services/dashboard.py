from __future__ import annotations

from typing import Sequence

from chemlab.app.models.inventory import ChemicalRecord, Transaction
from chemlab.app.schemas.dashboard import DashboardRead
from chemlab.services.reorder import needs_reorder
from chemlab.services.units_in_use import has_stock_advisory


def stock_advisories(records: Sequence[ChemicalRecord]) -> list[str]:
    return [c.id for c in records if has_stock_advisory(c)]


def summarize(
    records: Sequence[ChemicalRecord],
    transactions: Sequence[Transaction],
    *,
    recent: int = 5,
) -> DashboardRead:
    """
    Overview figures.

    ``transactions`` is expected newest first (``TransactionLedger.list_transactions``).
    A container count adds sealed stock and opened units together.
    """
    in_use = sum(len(c.units_in_use) for c in records)
    return DashboardRead(
        chemical_types=len(records),
        low_stock_count=sum(1 for c in records if needs_reorder(c)),
        total_containers=sum(c.current_stock for c in records) + in_use,
        units_in_use=in_use,
        recent_transactions=list(transactions[:recent]),
        advisories=stock_advisories(records),
    )
