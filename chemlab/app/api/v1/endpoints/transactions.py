from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from chemlab.app.api.deps import get_inventory
from chemlab.app.models.core_types import TransactionType
from chemlab.app.models.inventory import Quantity, Transaction
from chemlab.services.inventory import InventoryService

router = APIRouter(prefix="/transactions")


class TransactionCreate(BaseModel):
    chemical_id: str
    type: TransactionType
    quantity: Quantity = Field(gt=0)
    user: str | None = None  # defaults to the current user
    reason: str | None = None


@router.get("", response_model=list[Transaction])
def list_transactions(
    chemical_id: str | None = None,
    svc: InventoryService = Depends(get_inventory),
):
    """Newest first."""
    return svc.list_transactions(chemical_id)


@router.post("", response_model=Transaction, status_code=201)
def record_transaction(payload: TransactionCreate, svc: InventoryService = Depends(get_inventory)):
    return svc.record_transaction(
        payload.chemical_id,
        payload.type,
        payload.quantity,
        user=payload.user,
        reason=payload.reason,
    )
