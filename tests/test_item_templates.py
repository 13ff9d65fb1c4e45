import pytest
from pydantic import ValidationError

from rims.schemas.item_template import ItemTemplateCreate, ItemTemplateUpdate
from rims.services import item_template_service


def test_template_crud(repos):
    created = item_template_service.create_template(
        repos, ItemTemplateCreate(name="Resistor", category="Passives", default_fields={"location": "R1"})
    )
    assert created.default_fields == {"location": "R1"}
    assert item_template_service.get_template(repos, created.id) == created

    updated = item_template_service.update_template(
        repos, created.id, ItemTemplateUpdate(default_fields={"location": "R2", "reorderPoint": 50})
    )
    assert updated.name == "Resistor"
    assert updated.default_fields == {"location": "R2", "reorderPoint": 50}
    assert item_template_service.update_template(repos, 999, ItemTemplateUpdate(name="x")) is None

    assert item_template_service.delete_template(repos, created.id) is True
    assert item_template_service.delete_template(repos, created.id) is False
    assert item_template_service.list_templates(repos) == []


def test_templates_for_category(repos):
    for name, category in [("Resistor", "Passives"), ("Uno", "Boards"), ("Capacitor", "Passives")]:
        item_template_service.create_template(repos, ItemTemplateCreate(name=name, category=category))
    assert [t.name for t in item_template_service.list_templates(repos)] == ["Capacitor", "Resistor", "Uno"]
    assert sorted(t.name for t in item_template_service.get_templates_for_category(repos, "Passives")) == [
        "Capacitor",
        "Resistor",
    ]
    assert item_template_service.get_templates_for_category(repos, "Tools") == []


def test_template_from_item(repos, make_item):
    item = make_item(
        "Arduino Uno",
        category="Arduino",
        vendorName="Adafruit",
        vendorUrl="https://www.adafruit.com/product/50",
        location="H1LD1B1",
        reorderPoint=5,
        description="ATmega328 board",
        quantity=8,
    )
    template = item_template_service.create_template_from_item(repos, "Arduino board", item)
    assert template.category == "Arduino"
    assert template.default_fields == {
        "vendorName": "Adafruit",
        "vendorUrl": "https://www.adafruit.com/product/50",
        "location": "H1LD1B1",
        "reorderPoint": 5,
        "description": "ATmega328 board",
    }


def test_template_update_rejects_nulls():
    with pytest.raises(ValidationError):
        ItemTemplateUpdate(category=None)
