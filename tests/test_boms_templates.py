import pytest
from pydantic import ValidationError

from rims.schemas.bom import BOMCreate, BOMUpdate
from rims.schemas.item_template import ItemTemplateCreate
from rims.services import bom_service
from rims.time_utils import utcnow_iso


@pytest.fixture()
def parts(make_item):
    board = make_item("Board", quantity=10, unitValue=2.0)
    motor = make_item("Motor", quantity=3, unitValue=5.0)
    return board, motor


def test_bom_lines_roundtrip(repos, parts):
    board, motor = parts
    bom = bom_service.create_bom(
        repos,
        BOMCreate(name="Robot", items=[{"itemId": board.id, "quantity": 2}, {"itemId": motor.id, "quantity": 2}]),
    )
    stored = repos.boms.get_by_id(bom.id)
    assert [(line.item_id, line.quantity) for line in stored.items] == [(board.id, 2), (motor.id, 2)]


def test_bom_line_quantity_must_be_positive():
    with pytest.raises(ValidationError):
        BOMCreate(name="Bad", items=[{"itemId": 1, "quantity": 0}])


def test_unparseable_lines_come_back_raw(repos, db):
    bom = bom_service.create_bom(repos, BOMCreate(name="Broken"))
    db.execute("UPDATE boms SET items = ? WHERE id = ?", ["not json", bom.id])
    assert repos.boms.get_by_id(bom.id).items == "not json"
    assert bom_service.calculate_bom_cost(repos, bom.id).item_costs == []


def test_cost_and_buildable_quantity(repos, parts):
    board, motor = parts
    bom = bom_service.create_bom(
        repos,
        BOMCreate(
            name="Robot",
            items=[
                {"itemId": board.id, "quantity": 2},
                {"itemId": motor.id, "quantity": 2},
                {"itemId": 999, "quantity": 1},
            ],
        ),
    )
    breakdown = bom_service.calculate_bom_cost(repos, bom.id)
    assert breakdown.total_cost == 14.0
    assert [line.item_name for line in breakdown.item_costs] == ["Board", "Motor"]
    assert breakdown.can_build_quantity == 1
    assert bom_service.check_availability(repos, bom.id).can_build is True


def test_availability_lists_short_lines(repos, parts):
    board, motor = parts
    bom = bom_service.create_bom(repos, BOMCreate(name="Big robot", items=[{"itemId": motor.id, "quantity": 4}]))
    availability = bom_service.check_availability(repos, bom.id)
    assert availability.can_build is False
    assert availability.missing_items == ["Motor (need 4, have 3)"]
    assert bom_service.calculate_bom_cost(repos, bom.id).can_build_quantity == 0


def test_update_duplicate_delete(repos, parts):
    board, _ = parts
    bom = bom_service.create_bom(repos, BOMCreate(name="Kit", description="d", items=[{"itemId": board.id}]))

    updated = bom_service.update_bom(repos, bom.id, BOMUpdate(description="new"))
    assert updated.description == "new"
    assert len(updated.items) == 1

    copy = bom_service.duplicate_bom(repos, bom.id, "Kit copy")
    assert copy.id != bom.id
    assert copy.description == "new"
    assert [line.item_id for line in copy.items] == [board.id]

    assert [b.name for b in bom_service.list_boms(repos)] == ["Kit", "Kit copy"]
    assert {b.id for b in bom_service.get_boms_containing_item(repos, board.id)} == {bom.id, copy.id}
    assert bom_service.get_boms_containing_item(repos, 12345) == []

    assert bom_service.delete_bom(repos, bom.id) is True
    assert bom_service.update_bom(repos, bom.id, BOMUpdate(name="x")) is None
    assert bom_service.duplicate_bom(repos, bom.id, "y") is None


def test_item_templates(repos):
    now = utcnow_iso()
    for name, category in [("Resistor", "Passives"), ("Capacitor", "Passives"), ("Arduino", "Boards")]:
        data = ItemTemplateCreate(name=name, category=category, default_fields={"location": f"{name[0]}1"})
        repos.item_templates.create({**data.model_dump(by_alias=True), "createdAt": now, "updatedAt": now})

    assert [t.name for t in repos.item_templates.get_all_sorted()] == ["Arduino", "Capacitor", "Resistor"]
    passives = repos.item_templates.find_by_category("Passives")
    assert sorted(t.name for t in passives) == ["Capacitor", "Resistor"]
    assert passives[0].default_fields["location"] in {"R1", "C1"}
