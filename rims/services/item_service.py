from collections.abc import Sequence

from rims.config import settings
from rims.repositories.registry import Repositories
from rims.schemas.account import Account
from rims.schemas.item import Item, ItemCreate, ItemUpdate
from rims.services import cost_history_service, stock_history_service
from rims.time_utils import utcnow_iso


def create_item(repos: Repositories, data: ItemCreate, actor: Account | None = None) -> Item | None:
    item = repos.items.create_with_value(data)
    if item:
        stock_history_service.record_item_created(repos, item, actor)
    return item


def get_item(repos: Repositories, item_id: int) -> Item | None:
    return repos.items.get_by_id(item_id)


def list_items(repos: Repositories, category: str | None = None) -> list[Item]:
    if category:
        return repos.items.find_by_category(category)
    return repos.items.get_all()


def update_item(repos: Repositories, item_id: int, data: ItemUpdate, actor: Account | None = None) -> Item | None:
    existing = repos.items.get_by_id(item_id)
    if not existing:
        return None
    item = repos.items.update_with_value(item_id, data)
    if not item:
        return None
    stock_history_service.record_item_updated(repos, existing, item, actor)
    cost_history_service.record_cost_change(repos, item.id, existing.unit_value, item.unit_value)
    return item


def adjust_stock(
    repos: Repositories, item_id: int, change: int, notes: str = "", actor: Account | None = None
) -> Item | None:
    existing = repos.items.get_by_id(item_id)
    if not existing:
        return None
    new_qty = existing.quantity + change
    if new_qty < 0:
        raise ValueError(f"Insufficient stock. Current: {existing.quantity}, requested change: {change}")
    item = repos.items.update_with_value(item_id, {"quantity": new_qty})
    stock_history_service.record_stock_change(
        repos, "adjusted", item.id, item.name, actor,
        previous_quantity=existing.quantity, new_quantity=item.quantity,
        previous_value=existing.value, new_value=item.value,
        notes=notes,
    )
    return item


def delete_item(repos: Repositories, item_id: int, actor: Account | None = None) -> bool:
    item = repos.items.get_by_id(item_id)
    if not item:
        return False
    if not repos.items.delete(item_id):
        return False
    stock_history_service.record_item_deleted(repos, item, actor)
    repos.cost_history.delete_by_item_id(item_id)
    return True


def delete_items(repos: Repositories, ids: Sequence[int], actor: Account | None = None) -> int:
    if not ids:
        return 0
    items = [item for item in (repos.items.get_by_id(i) for i in ids) if item]
    deleted = repos.items.delete_many([item.id for item in items])
    for item in items:
        stock_history_service.record_item_deleted(repos, item, actor)
        repos.cost_history.delete_by_item_id(item.id)
    return deleted


def update_items_category(
    repos: Repositories, ids: Sequence[int], category: str, actor: Account | None = None
) -> int:
    if not ids:
        return 0
    items = [item for item in (repos.items.get_by_id(i) for i in ids) if item]
    old_categories = {item.id: item.category for item in items}
    changed = repos.items.update_category_bulk(ids, category, utcnow_iso())
    stock_history_service.record_bulk_category_change(repos, items, old_categories, category, actor)
    return changed


def get_low_stock(repos: Repositories, threshold: int | None = None) -> list[Item]:
    return repos.items.get_low_stock(settings.LOW_STOCK_THRESHOLD if threshold is None else threshold)


def get_items_needing_reorder(repos: Repositories) -> list[Item]:
    return repos.items.get_items_needing_reorder()
