"""
Units-in-use tracker.

Opened containers are tracked on the chemical record, independently of
``current_stock``: opening a unit does NOT take one out of the warehouse
count, and closing one does not put anything back. Whether opening should
consume a sealed container is an unresolved product question; until it is
decided the two counters stay decoupled.

Every function here returns an edited copy of the record. The caller saves
it through ``ChemicalStore.update`` (a full-record edit).
"""

from __future__ import annotations

from chemlab.app.core.errors import InvalidLevel, NotFound
from chemlab.app.models.core_types import UNIT_LEVELS
from chemlab.app.models.inventory import ChemicalRecord, UnitInUse


def _find(record: ChemicalRecord, unit_id: str) -> int:
    for i, u in enumerate(record.units_in_use):
        if u.id == unit_id:
            return i
    raise NotFound(f"Unit not found (chemical_id={record.id}, unit_id={unit_id})")


def open_unit(record: ChemicalRecord) -> tuple[ChemicalRecord, UnitInUse]:
    unit = UnitInUse(remaining=100)
    edited = record.model_copy(deep=True)
    edited.units_in_use.append(unit)
    return edited, unit


def set_unit_level(record: ChemicalRecord, unit_id: str, level: int) -> ChemicalRecord:
    if level not in UNIT_LEVELS:
        raise InvalidLevel(level)

    idx = _find(record, unit_id)
    edited = record.model_copy(deep=True)
    edited.units_in_use[idx] = UnitInUse(id=unit_id, remaining=int(level))
    return edited


def close_unit(record: ChemicalRecord, unit_id: str) -> ChemicalRecord:
    """Removes a fully consumed or discarded container."""
    idx = _find(record, unit_id)
    edited = record.model_copy(deep=True)
    del edited.units_in_use[idx]
    return edited


def has_stock_advisory(record: ChemicalRecord) -> bool:
    """
    Warehouse empty but an operator still has an open container.

    Advisory only: this state is valid and never rejected.
    """
    return record.current_stock == 0 and len(record.units_in_use) > 0
