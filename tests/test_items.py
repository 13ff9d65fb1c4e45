import pytest


def test_value_is_computed_on_create(make_item):
    item = make_item("Resistor pack", quantity=3, unitValue=2.5, value=999)
    assert item.value == 7.5


def test_value_follows_quantity_and_unit_value(repos, make_item):
    item = make_item("Sensor", quantity=2, unitValue=4.0)

    updated = repos.items.update(item.id, {"quantity": 5})
    assert updated.value == 20.0

    updated = repos.items.update(item.id, {"unitValue": 1.5})
    assert updated.value == 7.5

    updated = repos.items.update(item.id, {"name": "Sensor v2", "value": 1})
    assert updated.value == 7.5
    assert updated.updated_at >= item.updated_at


def test_none_operands_do_not_clear_value(repos, make_item):
    item = make_item("Cable", quantity=4, unitValue=1.0)
    updated = repos.items.update(item.id, {"quantity": None, "location": "Drawer"})
    assert updated.quantity == 4
    assert updated.value == 4.0


def test_find_by_category_and_barcode(repos, make_item):
    make_item("Uno", category="Arduino", barcode="RIMS-1")
    make_item("Mega", category="Arduino")
    make_item("Pi", category="Raspberry Pi")

    assert sorted(i.name for i in repos.items.find_by_category("Arduino")) == ["Mega", "Uno"]
    assert repos.items.find_by_barcode("RIMS-1").name == "Uno"
    assert repos.items.find_by_barcode("nope") is None


def test_low_stock_threshold_is_inclusive(repos, make_item):
    make_item("at", quantity=5)
    make_item("below", quantity=1)
    make_item("above", quantity=6)
    assert sorted(i.name for i in repos.items.get_low_stock(5)) == ["at", "below"]


def test_reorder_requires_positive_reorder_point(repos, make_item):
    make_item("needs reorder", quantity=3, reorderPoint=5)
    make_item("exactly at point", quantity=2, reorderPoint=2)
    make_item("plenty", quantity=10, reorderPoint=5)
    make_item("no reorder point", quantity=0, reorderPoint=0)
    names = sorted(i.name for i in repos.items.get_items_needing_reorder())
    assert names == ["exactly at point", "needs reorder"]


def test_bulk_category_update(repos, make_item):
    a = make_item("a", category="Old")
    b = make_item("b", category="Old")
    c = make_item("c", category="Other")

    assert repos.items.update_category_bulk([], "New") == 0
    assert repos.items.update_category_bulk([a.id, b.id], "New") == 2
    assert sorted(i.name for i in repos.items.find_by_category("New")) == ["a", "b"]
    assert repos.items.get_by_id(c.id).category == "Other"


def test_totals(repos, make_item):
    assert repos.items.get_total_quantity() == 0
    assert repos.items.get_total_value() == 0.0
    make_item("a", quantity=2, unitValue=1.25)
    make_item("b", quantity=3, unitValue=2.0)
    assert repos.items.get_total_quantity() == 5
    assert repos.items.get_total_value() == pytest.approx(8.5)
