from rims.config import settings
from rims.repositories.registry import Repositories
from rims.schemas.item import Item
from rims.schemas.stock_history import StockHistoryFilter, StockHistoryStats


def inventory_summary(repos: Repositories, threshold: int | None = None) -> dict:
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    items = repos.items.get_all()
    low_stock = repos.items.get_low_stock(threshold)
    reorder = repos.items.get_items_needing_reorder()

    return {
        "totalItems": len(items),
        "totalUnitsInStock": repos.items.get_total_quantity(),
        "totalInventoryValue": round(repos.items.get_total_value(), 2),
        "lowStockCount": len(low_stock),
        "lowStockItems": [{"id": i.id, "name": i.name, "quantity": i.quantity} for i in low_stock],
        "reorderCount": len(reorder),
        "reorderItems": [
            {"id": i.id, "name": i.name, "quantity": i.quantity, "reorderPoint": i.reorder_point} for i in reorder
        ],
        "byCategory": _group_by_category(items),
    }


def _group_by_category(items: list[Item]) -> list[dict]:
    cats: dict[str, dict] = {}
    for i in items:
        cat = i.category or "Uncategorized"
        if cat not in cats:
            cats[cat] = {"category": cat, "itemCount": 0, "totalUnits": 0, "totalValue": 0.0}
        cats[cat]["itemCount"] += 1
        cats[cat]["totalUnits"] += i.quantity
        cats[cat]["totalValue"] += i.value
    for v in cats.values():
        v["totalValue"] = round(v["totalValue"], 2)
    return list(cats.values())


def history_stats(repos: Repositories, history_filter: StockHistoryFilter | None = None) -> StockHistoryStats:
    return repos.stock_history.get_stats(history_filter)
