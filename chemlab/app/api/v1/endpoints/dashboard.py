from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from chemlab.app.api.deps import get_inventory
from chemlab.app.schemas.dashboard import DashboardRead
from chemlab.services.inventory import InventoryService

router = APIRouter(prefix="/dashboard")


@router.get("", response_model=DashboardRead)
def get_dashboard(
    recent: int = Query(default=5, ge=0, le=50),
    svc: InventoryService = Depends(get_inventory),
):
    return svc.dashboard(recent=recent)
