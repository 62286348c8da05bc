from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from chemlab.app.models.core_types import Currency, Role, TransactionType
from chemlab.app.models.inventory import (
    AppSettings,
    ChemicalRecord,
    Transaction,
    UnitInUse,
    User,
)
from chemlab.services.inventory import InventoryService

# Base unit cost in USD, per container
SEED_COSTS = {
    "c1": Decimal("35.00"),  # Acetone per drum
    "c2": Decimal("45.00"),  # H2SO4 per bottle
    "c3": Decimal("120.00"),  # Ethanol per drum
    "c4": Decimal("22.00"),  # NaOH per jar
    "c5": Decimal("38.00"),  # HCl per jerrycan
}


def seed_chemicals(now: datetime) -> list[ChemicalRecord]:
    def chem(id, name, functionality, package_size, stock, unit, min_level, target, units=()):
        return ChemicalRecord(
            id=id,
            name=name,
            functionality=functionality,
            package_size=package_size,
            current_stock=stock,
            unit=unit,
            min_level=min_level,
            target_level=target,
            last_updated=now,
            units_in_use=[UnitInUse(id=uid, remaining=r) for uid, r in units],
        )

    return [
        chem("c1", "Acetone", "Solvent / Cleaning", "20L", 12, "Drum", 15, 40, [("u1", 50)]),
        chem("c2", "Sulfuric Acid (98%)", "pH Adjustment / Catalyst", "2.5L", 4, "Bottle", 5, 10,
             [("u2", 75), ("u2b", 25)]),
        chem("c3", "Ethanol (Absolute)", "Solvent / Disinfectant", "200L", 25, "Drum", 10, 50),
        chem("c4", "Sodium Hydroxide Pellets", "Strong Base / Neutralizer", "1kg", 8, "Jar", 3, 10, [("u4", 25)]),
        chem("c5", "Hydrochloric Acid (37%)", "Acid Leveling Agent", "20L", 0, "Jerrycan", 6, 12, [("u5", 50)]),
    ]


def seed_transactions(now: datetime) -> list[Transaction]:
    return [
        Transaction(id="t1", chemical_id="c1", chemical_name="Acetone", type=TransactionType.stock_out,
                    quantity=5, date=now - timedelta(days=2), user="Dr. Chen", reason="Glassware cleaning"),
        Transaction(id="t2", chemical_id="c2", chemical_name="Sulfuric Acid (98%)", type=TransactionType.stock_out,
                    quantity=1, date=now - timedelta(days=1), user="Sarah Lin", reason="Synthesis Project X"),
        Transaction(id="t3", chemical_id="c5", chemical_name="Hydrochloric Acid (37%)",
                    type=TransactionType.stock_out, quantity=2, date=now - timedelta(hours=12),
                    user="Dr. Chen", reason="pH Adjustment"),
    ]


def seed_users() -> list[User]:
    return [
        User(id="u1", name="Dr. Chen", role=Role.manager, initials="DC"),
        User(id="u2", name="Sarah Lin", role=Role.staff, initials="SL"),
        User(id="u3", name="Mike Wang", role=Role.staff, initials="MW"),
        User(id="u4", name="Admin", role=Role.admin, initials="AD"),
    ]


def default_users() -> list[User]:
    return [User(id="u1", name="Admin", role=Role.admin, initials="A")]


def build_seeded_service(
    currency: Currency = Currency.twd,
    org_name: str = "Chem Lab",
    now: datetime | None = None,
) -> InventoryService:
    now = now or datetime.now(timezone.utc)
    return InventoryService(
        users=seed_users(),
        chemicals=seed_chemicals(now),
        transactions=seed_transactions(now),
        cost_table=SEED_COSTS,
        settings=AppSettings(currency=currency, org_name=org_name),
    )


def run_seed():
    svc = build_seeded_service()
    plan = svc.reorder_plan()
    print(
        f"SEED OK: chemicals={len(svc.list_chemicals())}, users={len(svc.list_users())}, "
        f"reorder={len(plan.items)} items, total={plan.total_cost:.2f} {plan.currency.value}"
    )


if __name__ == "__main__":
    run_seed()
