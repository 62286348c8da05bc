from __future__ import annotations

from fastapi import APIRouter, Depends

from chemlab.app.api.deps import get_inventory
from chemlab.app.models.inventory import AppSettings
from chemlab.services.inventory import InventoryService

router = APIRouter(prefix="/settings")


@router.get("", response_model=AppSettings)
def get_app_settings(svc: InventoryService = Depends(get_inventory)):
    return svc.get_settings()


@router.put("", response_model=AppSettings)
def update_app_settings(payload: AppSettings, svc: InventoryService = Depends(get_inventory)):
    return svc.update_settings(payload)
