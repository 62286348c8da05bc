from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)

from chemlab.app.models.core_types import (
    Currency,
    Role,
    TransactionType,
    UNIT_LEVELS,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def _exact_float(value):
    # floats go through their shortest repr, so 0.1 becomes Decimal("0.1")
    return Decimal(repr(value)) if isinstance(value, float) else value


def as_decimal(value) -> Decimal:
    return Decimal(_exact_float(value))


# Exact decimal amounts (stock, levels, quantities, money). JSON keeps them as numbers.
Quantity = Annotated[
    Decimal,
    BeforeValidator(_exact_float),
    PlainSerializer(float, return_type=float, when_used="json"),
]
Money = Quantity


# ---------- MASTER DATA ----------
class UnitInUse(BaseModel):
    id: str = Field(default_factory=new_id)
    remaining: int = 100  # percent full

    @field_validator("remaining")
    @classmethod
    def _check_level(cls, v: int) -> int:
        if v not in UNIT_LEVELS:
            raise ValueError(f"remaining must be one of {UNIT_LEVELS}")
        return v


class ChemicalDraft(BaseModel):
    """
    A chemical not yet in the store (no id).

    ``ChemicalDraft`` and ``ChemicalRecord`` together form the
    draft/persisted union: drafts go to ``add``, records go to ``update``.
    """

    name: str = ""
    functionality: str = ""  # e.g. 'Acid Leveling Agent', 'pH Control'
    package_size: str = ""  # e.g. '25kg', '200L'
    unit: str = "Drum"  # container type
    current_stock: Quantity = Decimal(0)  # sealed warehouse containers only
    min_level: Quantity = Decimal(0)  # reorder point
    target_level: Quantity = Decimal(0)  # desired maximum
    units_in_use: list[UnitInUse] = Field(default_factory=list)


class ChemicalRecord(ChemicalDraft):
    id: str
    last_updated: datetime = Field(default_factory=utcnow)


# ---------- LEDGER ----------
class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    chemical_id: str
    chemical_name: str  # snapshot, never follows a rename
    type: TransactionType
    quantity: Quantity
    date: datetime = Field(default_factory=utcnow)
    user: str  # display name snapshot, not a user id
    reason: str | None = None


# ---------- USERS ----------
class User(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    role: Role = Role.staff
    initials: str = "U"


# ---------- SETTINGS ----------
class AppSettings(BaseModel):
    currency: Currency = Currency.twd
    org_name: str = "Chem Lab"


# ---------- DERIVED (never stored) ----------
class ReorderItem(BaseModel):
    chemical_id: str
    name: str
    functionality: str
    package_size: str
    unit: str
    current_stock: Quantity
    min_level: Quantity
    suggested_qty: int
    unit_cost: Money  # already converted to the display currency
    units_in_use: list[UnitInUse] = Field(default_factory=list)

    @property
    def line_cost(self) -> Decimal:
        return self.suggested_qty * self.unit_cost


class ReorderPlan(BaseModel):
    items: list[ReorderItem] = Field(default_factory=list)
    total_cost: Money = Decimal(0)
    currency: Currency = Currency.twd
