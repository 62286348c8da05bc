import pytest

from chemlab.app.core.errors import InvalidInput, InvalidLevel, NotFound
from chemlab.app.models.inventory import UnitInUse
from chemlab.services.units_in_use import has_stock_advisory

from conftest import make_chemical


def test_open_unit_starts_full_and_leaves_stock_alone(make_service):
    svc = make_service([make_chemical("c1", current_stock=4)])

    unit = svc.open_unit("c1")

    chem = svc.get_chemical("c1")
    assert unit.remaining == 100
    assert [u.id for u in chem.units_in_use] == [unit.id]
    assert chem.current_stock == 4
    assert svc.list_transactions() == []


def test_open_units_are_appended_in_order(make_service):
    svc = make_service([make_chemical("c1")])
    first = svc.open_unit("c1")
    second = svc.open_unit("c1")
    assert [u.id for u in svc.get_chemical("c1").units_in_use] == [first.id, second.id]


@pytest.mark.parametrize("level", [25, 50, 75, 100])
def test_set_unit_level_accepts_quarters(make_service, level):
    svc = make_service([make_chemical("c1", units_in_use=[UnitInUse(id="u1", remaining=100)])])
    chem = svc.set_unit_level("c1", "u1", level)
    assert chem.units_in_use[0].remaining == level
    assert chem.current_stock == 10


@pytest.mark.parametrize("level", [0, 10, 60, 101, -25, "half"])
def test_set_unit_level_rejects_other_values(make_service, level):
    svc = make_service([make_chemical("c1", units_in_use=[UnitInUse(id="u1", remaining=50)])])

    with pytest.raises(InvalidLevel) as exc:
        svc.set_unit_level("c1", "u1", level)

    assert isinstance(exc.value, InvalidInput)
    assert svc.get_chemical("c1").units_in_use[0].remaining == 50


def test_set_level_on_unknown_unit_is_not_found(make_service):
    svc = make_service([make_chemical("c1")])
    with pytest.raises(NotFound):
        svc.set_unit_level("c1", "nope", 50)


def test_close_unit_removes_only_that_unit(make_service):
    units = [UnitInUse(id="u2", remaining=75), UnitInUse(id="u2b", remaining=25)]
    svc = make_service([make_chemical("c2", current_stock=4, units_in_use=units)])

    chem = svc.close_unit("c2", "u2")

    assert [u.id for u in chem.units_in_use] == ["u2b"]
    assert chem.current_stock == 4


def test_close_unknown_unit_is_not_found(make_service):
    svc = make_service([make_chemical("c1")])
    with pytest.raises(NotFound):
        svc.close_unit("c1", "nope")


def test_unit_operations_on_unknown_chemical_are_not_found(make_service):
    svc = make_service()
    with pytest.raises(NotFound):
        svc.open_unit("ghost")


def test_empty_warehouse_with_open_unit_is_an_advisory_not_an_error(make_service):
    """
    GIVEN stock 0 and one open container
    THEN the state is accepted and reported as an advisory
    """
    chem = make_chemical("c5", current_stock=0, units_in_use=[UnitInUse(id="u5", remaining=50)])
    svc = make_service([chem, make_chemical("c1", current_stock=0)])

    assert has_stock_advisory(svc.get_chemical("c5"))
    assert svc.stock_advisories() == ["c5"]


def test_draining_stock_raises_advisory(make_service):
    svc = make_service([make_chemical("c1", current_stock=1)])
    svc.open_unit("c1")
    assert svc.stock_advisories() == []

    svc.record_transaction("c1", "OUT", 1)
    assert svc.stock_advisories() == ["c1"]
