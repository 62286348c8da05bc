from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from chemlab.app.api.deps import get_inventory
from chemlab.app.models.inventory import ChemicalDraft, ChemicalRecord, Quantity, UnitInUse
from chemlab.services.inventory import InventoryService

router = APIRouter(prefix="/chemicals")


# ---------- Schemas ----------
class ChemicalWrite(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    functionality: str = Field(default="", max_length=255)
    package_size: str = Field(default="", max_length=64)
    unit: str = Field(default="Drum", min_length=1, max_length=32)
    current_stock: Quantity = Field(default=0, ge=0)
    min_level: Quantity = Field(default=0, ge=0)
    target_level: Quantity = Field(default=0, ge=0)
    units_in_use: list[UnitInUse] = Field(default_factory=list)


# ---------- Endpoints ----------
@router.get("", response_model=list[ChemicalRecord])
def list_chemicals(svc: InventoryService = Depends(get_inventory)):
    """Insertion order, the same order the reorder list uses."""
    return svc.list_chemicals()


@router.get("/{chemical_id}", response_model=ChemicalRecord)
def get_chemical(chemical_id: str, svc: InventoryService = Depends(get_inventory)):
    return svc.get_chemical(chemical_id)


@router.post("", response_model=ChemicalRecord, status_code=201)
def create_chemical(payload: ChemicalWrite, svc: InventoryService = Depends(get_inventory)):
    return svc.add_chemical(ChemicalDraft(**payload.model_dump()))


@router.put("/{chemical_id}", response_model=ChemicalRecord)
def update_chemical(
    chemical_id: str,
    payload: ChemicalWrite,
    svc: InventoryService = Depends(get_inventory),
):
    """
    Full edit: every field is replaced, including the open units list.
    Stock corrections made here do not go through the ledger.
    """
    existing = svc.get_chemical(chemical_id)
    record = ChemicalRecord(
        **payload.model_dump(),
        id=existing.id,
        last_updated=existing.last_updated,
    )
    return svc.update_chemical(record)
