from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from chemlab.app.api.deps import get_inventory
from chemlab.app.models.core_types import Role
from chemlab.app.models.inventory import User
from chemlab.services.inventory import InventoryService

router = APIRouter(prefix="/users")


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200, pattern=r"\S")
    role: Role = Role.staff


class CurrentUserSelect(BaseModel):
    user_id: str


@router.get("", response_model=list[User])
def list_users(svc: InventoryService = Depends(get_inventory)):
    return svc.list_users()


@router.post("", response_model=User, status_code=201)
def create_user(payload: UserCreate, svc: InventoryService = Depends(get_inventory)):
    return svc.add_user(payload.name.strip(), payload.role)


@router.get("/current", response_model=User)
def get_current_user(svc: InventoryService = Depends(get_inventory)):
    return svc.current_user()


@router.put("/current", response_model=User)
def set_current_user(payload: CurrentUserSelect, svc: InventoryService = Depends(get_inventory)):
    return svc.set_current_user(payload.user_id)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: str, svc: InventoryService = Depends(get_inventory)):
    """Past transactions keep the deleted user's name."""
    svc.delete_user(user_id)
