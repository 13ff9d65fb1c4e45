from collections.abc import Iterable, Mapping

from rims.repositories.registry import Repositories
from rims.schemas.account import Account
from rims.schemas.item import Item
from rims.schemas.stock_history import StockChangeType, StockHistoryEntry
from rims.time_utils import utcnow_iso


def default_notes(
    change_type: StockChangeType,
    previous_quantity: int | None = None,
    new_quantity: int | None = None,
    previous_category: str | None = None,
    new_category: str | None = None,
) -> str:
    diff = (new_quantity or 0) - (previous_quantity or 0)
    if change_type == "created":
        return f"Item created with quantity {new_quantity or 0}"
    if change_type == "deleted":
        return "Item deleted"
    if change_type == "updated":
        if previous_quantity != new_quantity:
            return f"Stock increased by {diff}" if diff > 0 else f"Stock decreased by {abs(diff)}"
        return "Item updated"
    if change_type == "adjusted":
        return f"Stock adjusted +{diff}" if diff > 0 else f"Stock adjusted {diff}"
    if change_type == "category_changed":
        return f'Category changed from "{previous_category}" to "{new_category}"'
    return ""


def record_stock_change(
    repos: Repositories,
    change_type: StockChangeType,
    item_id: int,
    item_name: str,
    actor: Account | None = None,
    previous_quantity: int | None = None,
    new_quantity: int | None = None,
    previous_value: float | None = None,
    new_value: float | None = None,
    previous_category: str | None = None,
    new_category: str | None = None,
    notes: str = "",
) -> StockHistoryEntry | None:
    return repos.stock_history.create(
        {
            "itemId": item_id,
            "itemName": item_name,
            "changeType": change_type,
            "previousQuantity": previous_quantity,
            "newQuantity": new_quantity,
            "previousValue": previous_value,
            "newValue": new_value,
            "previousCategory": previous_category,
            "newCategory": new_category,
            "notes": notes
            or default_notes(change_type, previous_quantity, new_quantity, previous_category, new_category),
            "userId": actor.id if actor else None,
            "userEmail": actor.email if actor else None,
            "timestamp": utcnow_iso(),
        }
    )


def record_item_created(repos: Repositories, item: Item, actor: Account | None = None) -> None:
    record_stock_change(
        repos, "created", item.id, item.name, actor,
        new_quantity=item.quantity, new_value=item.value, new_category=item.category,
    )


def record_item_updated(repos: Repositories, old: Item, new: Item, actor: Account | None = None) -> None:
    """One entry per changed field: quantity and category are logged separately."""
    if old.quantity != new.quantity:
        record_stock_change(
            repos, "updated", new.id, new.name, actor,
            previous_quantity=old.quantity, new_quantity=new.quantity,
            previous_value=old.value, new_value=new.value,
        )
    if old.category != new.category:
        record_stock_change(
            repos, "category_changed", new.id, new.name, actor,
            previous_category=old.category, new_category=new.category,
        )


def record_item_deleted(repos: Repositories, item: Item, actor: Account | None = None) -> None:
    record_stock_change(
        repos, "deleted", item.id, item.name, actor,
        previous_quantity=item.quantity, previous_value=item.value, previous_category=item.category,
    )


def record_bulk_category_change(
    repos: Repositories,
    items: Iterable[Item],
    old_categories: Mapping[int, str],
    new_category: str,
    actor: Account | None = None,
) -> None:
    for item in items:
        old_category = old_categories.get(item.id)
        if old_category is not None and old_category != new_category:
            record_stock_change(
                repos, "category_changed", item.id, item.name, actor,
                previous_category=old_category, new_category=new_category,
            )
