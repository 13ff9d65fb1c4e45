import pytest

from rims.repositories.base import ImmutableLedgerError
from rims.schemas.item import ItemCreate


def test_create_reads_back_stored_row(repos):
    item = repos.items.create(ItemCreate(name="Servo", quantity=2, unit_value=9.5, category="Motors"))
    assert item.id == 1
    assert item.name == "Servo"
    assert item.category == "Motors"
    assert item.created_at.endswith("Z")
    assert repos.items.get_by_id(item.id) == item


def test_create_accepts_storage_names(repos):
    item = repos.items.create({"name": "LED", "unit_value": 0.2, "reorder_point": 10})
    assert item.unit_value == 0.2
    assert item.reorder_point == 10


def test_unknown_attribute_is_rejected_before_sql(repos, db):
    with pytest.raises(ValueError, match="Unknown column"):
        repos.items.create({"name": "X", "colour": "red"})
    with pytest.raises(ValueError):
        repos.boms.create({"name": "B", "createdAt": "t", "updatedAt": "t", "items; DROP TABLE items": 1})
    assert repos.items.count() == 0


def test_update_missing_and_empty(repos, make_item):
    assert repos.items.update(42, {"name": "Ghost"}) is None
    item = make_item("Same")
    assert repos.items.update(item.id, {}) == item


def test_update_ignores_id(repos, make_item):
    item = make_item("Keep id")
    updated = repos.items.update(item.id, {"id": 99, "location": "B2"})
    assert updated.id == item.id
    assert updated.location == "B2"
    assert repos.items.get_by_id(99) is None


def test_delete_and_delete_many(repos, make_item):
    a, b, c = make_item("a"), make_item("b"), make_item("c")
    assert repos.items.delete(a.id) is True
    assert repos.items.delete(a.id) is False
    assert repos.items.delete_many([]) == 0
    assert repos.items.delete_many([b.id, c.id, 1000]) == 2
    assert repos.items.count() == 0


@pytest.mark.parametrize("ledger", ["stock_history", "cost_history"])
def test_ledgers_are_append_only(repos, ledger):
    repo = getattr(repos, ledger)
    with pytest.raises(ImmutableLedgerError):
        repo.update(1, {"notes": "edited"})
    with pytest.raises(ImmutableLedgerError):
        repo.delete(1)
    with pytest.raises(ImmutableLedgerError):
        repo.delete_many([1, 2])


def test_counts_cover_every_table(repos, make_item):
    make_item("a")
    counts = repos.counts()
    assert counts == {
        "users": 0,
        "items": 1,
        "stockHistory": 0,
        "costHistory": 0,
        "boms": 0,
        "itemTemplates": 0,
        "vendorPriceCache": 0,
    }
