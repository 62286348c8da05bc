from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, Mapping

from chemlab.app.core.errors import InvalidInput
from chemlab.app.models.core_types import CURRENCY_RATES, Currency
from chemlab.app.models.inventory import (
    AppSettings,
    ChemicalRecord,
    ReorderItem,
    ReorderPlan,
    as_decimal,
)


def needs_reorder(record: ChemicalRecord) -> bool:
    # inclusive: a chemical sitting exactly at its minimum is already flagged
    return record.current_stock <= record.min_level


def currency_rate(currency: Currency, rates: Mapping[Currency, Decimal] = CURRENCY_RATES) -> Decimal:
    try:
        return as_decimal(rates[Currency(currency)])
    except (KeyError, ValueError):
        raise InvalidInput(f"No conversion rate for currency {currency!r}") from None


def compute_reorder(
    records: Iterable[ChemicalRecord],
    settings: AppSettings,
    cost_table: Mapping[str, Decimal | float],
    *,
    rates: Mapping[Currency, Decimal] = CURRENCY_RATES,
) -> ReorderPlan:
    """
    Reorder recommendations for a snapshot of the chemical store.

    Business rule:
        selected      = current_stock <= min_level   (input order kept)
        suggested_qty = ceil(target_level - current_stock)
        unit_cost     = cost_table[chemical_id] * rate[currency]
        total_cost    = SUM(suggested_qty * unit_cost)

    Properties:
    - pure (reads only, mutates nothing)
    - idempotent
    - an unknown chemical id in the cost table costs 0
    - money is exact (Decimal), cost-table floats are taken at their decimal repr
    """
    rate = currency_rate(settings.currency, rates)

    items: list[ReorderItem] = []
    for c in records:
        if not needs_reorder(c):
            continue

        # Not clamped: with target_level < current_stock (inverted config)
        # this goes negative and is passed through as-is. Whether such a
        # configuration should be rejected is still a product decision.
        suggested = math.ceil(c.target_level - c.current_stock)

        items.append(
            ReorderItem(
                chemical_id=c.id,
                name=c.name,
                functionality=c.functionality,
                package_size=c.package_size,
                unit=c.unit,
                current_stock=c.current_stock,
                min_level=c.min_level,
                suggested_qty=suggested,
                unit_cost=as_decimal(cost_table.get(c.id, 0)) * rate,
                units_in_use=[u.model_copy() for u in c.units_in_use],
            )
        )

    total = sum((i.line_cost for i in items), Decimal(0))
    return ReorderPlan(items=items, total_cost=total, currency=settings.currency)
