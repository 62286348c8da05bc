from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from chemlab.app.api.deps import get_inventory
from chemlab.app.models.inventory import ChemicalRecord, UnitInUse
from chemlab.services.inventory import InventoryService

router = APIRouter(prefix="/chemicals/{chemical_id}/units")


class UnitLevelUpdate(BaseModel):
    remaining: int  # 25, 50, 75 or 100; checked by the tracker


@router.post("", response_model=UnitInUse, status_code=201)
def open_unit(chemical_id: str, svc: InventoryService = Depends(get_inventory)):
    """Opens a container at 100%. Warehouse stock is not decremented."""
    return svc.open_unit(chemical_id)


@router.put("/{unit_id}", response_model=ChemicalRecord)
def set_unit_level(
    chemical_id: str,
    unit_id: str,
    payload: UnitLevelUpdate,
    svc: InventoryService = Depends(get_inventory),
):
    return svc.set_unit_level(chemical_id, unit_id, payload.remaining)


@router.delete("/{unit_id}", response_model=ChemicalRecord)
def close_unit(chemical_id: str, unit_id: str, svc: InventoryService = Depends(get_inventory)):
    return svc.close_unit(chemical_id, unit_id)
