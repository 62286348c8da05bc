from decimal import Decimal

import pytest

from chemlab.app.core.errors import InvalidInput, InvalidLevel, NotFound
from chemlab.app.models.inventory import ChemicalDraft, UnitInUse
from chemlab.services.chemicals import ChemicalStore

from conftest import NOW, make_chemical


def test_add_assigns_id_timestamp_and_empty_units():
    store = ChemicalStore()
    rec = store.add(ChemicalDraft(name="Acetone", unit="Drum", current_stock=12, min_level=15, target_level=40))

    assert rec.id
    assert rec.last_updated is not None
    assert rec.units_in_use == []
    assert store.get(rec.id) == rec


def test_list_keeps_insertion_order():
    store = ChemicalStore([make_chemical("b"), make_chemical("a")])
    store.add(ChemicalDraft(name="Zinc"))
    names = [c.name for c in store.list()]
    assert names == ["TEST-CHEM-b", "TEST-CHEM-a", "Zinc"]


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_name_is_rejected(name):
    store = ChemicalStore()
    with pytest.raises(InvalidInput):
        store.add(ChemicalDraft(name=name))
    assert len(store) == 0


@pytest.mark.parametrize("field", ["current_stock", "min_level", "target_level"])
def test_negative_levels_are_rejected(field):
    store = ChemicalStore()
    with pytest.raises(InvalidInput):
        store.add(ChemicalDraft(name="Acetone", **{field: -1}))


def test_min_above_target_is_accepted():
    store = ChemicalStore()
    rec = store.add(ChemicalDraft(name="Odd config", min_level=20, target_level=5))
    assert rec.min_level == 20


def test_update_replaces_all_fields_but_id():
    store = ChemicalStore([make_chemical("c1", units_in_use=[UnitInUse(id="u1", remaining=50)])])
    edited = store.get("c1").model_copy(
        update={
            "name": "Renamed",
            "current_stock": 3,
            "target_level": 8,
            "units_in_use": [UnitInUse(id="u9", remaining=25)],
        }
    )

    saved = store.update(edited)

    assert saved.id == "c1"
    assert saved.name == "Renamed"
    assert saved.current_stock == 3
    assert [u.id for u in saved.units_in_use] == ["u9"]
    assert saved.last_updated > NOW


def test_update_unknown_id_is_not_found():
    store = ChemicalStore()
    with pytest.raises(NotFound):
        store.update(make_chemical("ghost"))


def test_update_with_draft_is_rejected():
    store = ChemicalStore([make_chemical("c1")])
    with pytest.raises(InvalidInput):
        store.update(ChemicalDraft(name="no id"))


def test_add_with_persisted_record_is_rejected():
    store = ChemicalStore()
    with pytest.raises(InvalidInput):
        store.add(make_chemical("c1"))


def test_invalid_unit_level_slipped_past_model_is_rejected():
    store = ChemicalStore([make_chemical("c1")])
    bad = UnitInUse.model_construct(id="u1", remaining=30)
    edited = store.get("c1").model_copy(update={"units_in_use": [bad]})

    with pytest.raises(InvalidLevel):
        store.update(edited)
    assert store.get("c1").units_in_use == []


def test_returned_records_are_copies():
    store = ChemicalStore([make_chemical("c1", current_stock=5)])
    rec = store.get("c1")
    rec.current_stock = 999
    rec.units_in_use.append(UnitInUse())

    fresh = store.get("c1")
    assert fresh.current_stock == 5
    assert fresh.units_in_use == []


def test_duplicate_ids_on_load_are_rejected():
    with pytest.raises(InvalidInput):
        ChemicalStore([make_chemical("c1"), make_chemical("c1")])


def test_get_unknown_is_not_found():
    with pytest.raises(NotFound):
        ChemicalStore().get("nope")


def test_save_resolves_draft_versus_persisted(make_service):
    svc = make_service()

    added = svc.save_chemical(ChemicalDraft(name="Methanol", current_stock=2))
    assert [c.id for c in svc.list_chemicals()] == [added.id]

    saved = svc.save_chemical(added.model_copy(update={"current_stock": 7}))
    assert saved.id == added.id
    assert len(svc.list_chemicals()) == 1
    assert svc.get_chemical(added.id).current_stock == 7
    assert isinstance(svc.get_chemical(added.id).current_stock, Decimal)


def test_locks_exist_only_for_stored_chemicals():
    store = ChemicalStore([make_chemical("c1")])

    with pytest.raises(NotFound):
        store.lock_for("nope")
    assert set(store._locks) == {"c1"}

    added = store.add(ChemicalDraft(name="Methanol"))
    assert store.lock_for(added.id) is store.lock_for(added.id)
    assert set(store._locks) == {"c1", added.id}


def test_update_of_unknown_record_is_not_found():
    store = ChemicalStore()
    with pytest.raises(NotFound):
        store.update(make_chemical("ghost"))
    assert store._locks == {}


def test_levels_are_exact_decimals():
    rec = make_chemical("c1", current_stock=0.3, min_level=0.1, target_level=2)

    assert rec.current_stock == Decimal("0.3")
    assert rec.min_level == Decimal("0.1")
    assert rec.model_dump(mode="json")["current_stock"] == 0.3
