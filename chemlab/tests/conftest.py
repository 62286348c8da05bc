from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from chemlab.app.core.config import Settings
from chemlab.app.main import create_app
from chemlab.app.models.core_types import Currency, Role
from chemlab.app.models.inventory import AppSettings, ChemicalRecord, User
from chemlab.app.seed import build_seeded_service
from chemlab.services.inventory import InventoryService
from chemlab.services.procurement import ReportClient

NOW = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)


def make_chemical(id="x1", **overrides) -> ChemicalRecord:
    fields = dict(
        id=id,
        name=f"TEST-CHEM-{id}",
        functionality="Test reagent",
        package_size="1L",
        unit="Bottle",
        current_stock=10,
        min_level=2,
        target_level=20,
        last_updated=NOW,
    )
    fields.update(overrides)
    return ChemicalRecord(**fields)


@pytest.fixture
def make_service():
    """
    Isolated service per test.

    Every call builds a fresh InventoryService; nothing is shared between tests.
    """

    def _make(chemicals=(), users=None, cost_table=None, currency=Currency.usd):
        return InventoryService(
            users=users or [User(id="u1", name="Dr. Chen", role=Role.manager, initials="DC")],
            chemicals=chemicals,
            cost_table=cost_table or {},
            settings=AppSettings(currency=currency, org_name="Test Lab"),
        )

    return _make


@pytest.fixture
def seeded() -> InventoryService:
    return build_seeded_service(currency=Currency.usd, org_name="Test Lab", now=NOW)


@pytest.fixture
def client(seeded):
    app = create_app(
        inventory=seeded,
        report_client=ReportClient(api_key=None),
        settings=Settings(seed=False),
    )
    with TestClient(app) as c:
        yield c
