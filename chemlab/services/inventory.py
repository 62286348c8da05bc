from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping

from chemlab.app.core.errors import InvalidInput
from chemlab.app.models.core_types import Role, TransactionType
from chemlab.app.models.inventory import (
    AppSettings,
    ChemicalDraft,
    ChemicalRecord,
    ReorderPlan,
    Transaction,
    UnitInUse,
    User,
)
from chemlab.app.schemas.dashboard import DashboardRead
from chemlab.services import units_in_use
from chemlab.services.chemicals import ChemicalStore
from chemlab.services.dashboard import stock_advisories, summarize
from chemlab.services.ledger import TransactionLedger
from chemlab.services.reorder import compute_reorder
from chemlab.services.users import UserDirectory

logger = logging.getLogger(__name__)


class InventoryService:
    """
    One lab's inventory state: chemicals, ledger, users, costs, settings.

    Built once per process (see ``chemlab.app.main.create_app``) or once per
    test. Nothing here is module-level state.
    """

    def __init__(
        self,
        *,
        users: Iterable[User],
        chemicals: Iterable[ChemicalRecord] = (),
        transactions: Iterable[Transaction] = (),
        cost_table: Mapping[str, Decimal | float] | None = None,
        settings: AppSettings | None = None,
    ):
        self.store = ChemicalStore(chemicals)
        self.ledger = TransactionLedger(self.store, transactions)
        self.users = UserDirectory(users)
        self.cost_table: dict[str, Decimal | float] = dict(cost_table or {})
        self.settings = settings or AppSettings()

    # ---------- Chemicals ----------
    def list_chemicals(self) -> list[ChemicalRecord]:
        return self.store.list()

    def get_chemical(self, chemical_id: str) -> ChemicalRecord:
        return self.store.get(chemical_id)

    def add_chemical(self, draft: ChemicalDraft) -> ChemicalRecord:
        return self.store.add(draft)

    def update_chemical(self, record: ChemicalRecord) -> ChemicalRecord:
        return self.store.update(record)

    def save_chemical(self, entry: ChemicalDraft | ChemicalRecord) -> ChemicalRecord:
        """Drafts are added, persisted records are updated."""
        if isinstance(entry, ChemicalRecord):
            return self.store.update(entry)
        return self.store.add(entry)

    # ---------- Units in use ----------
    def open_unit(self, chemical_id: str) -> UnitInUse:
        with self.store.lock_for(chemical_id):
            edited, unit = units_in_use.open_unit(self.store.get(chemical_id))
            self.store.update(edited)
        return unit

    def set_unit_level(self, chemical_id: str, unit_id: str, level: int) -> ChemicalRecord:
        with self.store.lock_for(chemical_id):
            edited = units_in_use.set_unit_level(self.store.get(chemical_id), unit_id, level)
            return self.store.update(edited)

    def close_unit(self, chemical_id: str, unit_id: str) -> ChemicalRecord:
        with self.store.lock_for(chemical_id):
            edited = units_in_use.close_unit(self.store.get(chemical_id), unit_id)
            return self.store.update(edited)

    def stock_advisories(self) -> list[str]:
        return stock_advisories(self.store.list())

    # ---------- Ledger ----------
    def record_transaction(
        self,
        chemical_id: str,
        tx_type: TransactionType,
        quantity: Decimal | int | float,
        user: str | None = None,
        reason: str | None = None,
    ) -> Transaction:
        """``user`` defaults to the current user's display name."""
        if user is None:
            user = self.users.current_user().name
        return self.ledger.record_transaction(chemical_id, tx_type, quantity, user, reason)

    def list_transactions(self, chemical_id: str | None = None) -> list[Transaction]:
        if chemical_id is not None:
            return self.ledger.for_chemical(chemical_id)
        return self.ledger.list_transactions()

    # ---------- Users ----------
    def list_users(self) -> list[User]:
        return self.users.list_users()

    def add_user(self, name: str, role: Role = Role.staff) -> User:
        return self.users.add_user(name, role)

    def delete_user(self, user_id: str) -> None:
        self.users.delete_user(user_id)

    def current_user(self) -> User:
        return self.users.current_user()

    def set_current_user(self, user_id: str) -> User:
        return self.users.set_current_user(user_id)

    # ---------- Settings ----------
    def get_settings(self) -> AppSettings:
        return self.settings.model_copy()

    def update_settings(self, settings: AppSettings) -> AppSettings:
        if not settings.org_name.strip():
            raise InvalidInput("Organization name is required")
        self.settings = settings.model_copy()
        logger.info("settings updated currency=%s", self.settings.currency.value)
        return self.get_settings()

    # ---------- Derived ----------
    def reorder_plan(self) -> ReorderPlan:
        return compute_reorder(self.store.list(), self.settings, self.cost_table)

    def dashboard(self, recent: int = 5) -> DashboardRead:
        return summarize(self.store.list(), self.ledger.list_transactions(), recent=recent)
