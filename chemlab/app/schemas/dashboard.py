from pydantic import BaseModel, Field

from chemlab.app.models.inventory import Quantity, Transaction


class DashboardRead(BaseModel):
    chemical_types: int
    low_stock_count: int

    total_containers: Quantity  # warehouse stock + opened units
    units_in_use: int

    recent_transactions: list[Transaction] = Field(default_factory=list)
    advisories: list[str] = Field(default_factory=list)  # READ ONLY: chemical ids, stock 0 but units open
