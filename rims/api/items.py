from fastapi import APIRouter, Depends, HTTPException

from rims.repositories.registry import Repositories, get_repos
from rims.schemas.cost_history import CostHistoryEntry, CostStats
from rims.schemas.item import BulkCategory, BulkIds, Item, ItemCreate, ItemUpdate, StockAdjust
from rims.schemas.stock_history import StockHistoryEntry
from rims.services import cost_history_service, item_service

router = APIRouter(prefix="/items", tags=["Items"])


def _get_or_404(repos: Repositories, item_id: int) -> Item:
    item = item_service.get_item(repos, item_id)
    if not item:
        raise HTTPException(404, "Item not found")
    return item


@router.post("", response_model=Item, status_code=201)
def create_item(data: ItemCreate, repos: Repositories = Depends(get_repos)):
    if data.barcode and repos.items.find_by_barcode(data.barcode):
        raise HTTPException(400, f"Item with barcode {data.barcode} already exists")
    item = item_service.create_item(repos, data)
    if not item:
        raise HTTPException(503, "Database not ready")
    return item


@router.get("", response_model=list[Item])
def list_items(category: str | None = None, repos: Repositories = Depends(get_repos)):
    return item_service.list_items(repos, category=category)


@router.get("/low-stock", response_model=list[Item])
def low_stock(threshold: int | None = None, repos: Repositories = Depends(get_repos)):
    return item_service.get_low_stock(repos, threshold)


@router.get("/reorder", response_model=list[Item])
def needing_reorder(repos: Repositories = Depends(get_repos)):
    return item_service.get_items_needing_reorder(repos)


@router.get("/barcode/{barcode}", response_model=Item)
def get_by_barcode(barcode: str, repos: Repositories = Depends(get_repos)):
    item = repos.items.find_by_barcode(barcode)
    if not item:
        raise HTTPException(404, "Item not found")
    return item


@router.post("/bulk-delete")
def bulk_delete(data: BulkIds, repos: Repositories = Depends(get_repos)):
    return {"deleted": item_service.delete_items(repos, data.ids)}


@router.post("/bulk-category")
def bulk_category(data: BulkCategory, repos: Repositories = Depends(get_repos)):
    return {"updated": item_service.update_items_category(repos, data.ids, data.category)}


@router.get("/{item_id}", response_model=Item)
def get_item(item_id: int, repos: Repositories = Depends(get_repos)):
    return _get_or_404(repos, item_id)


@router.patch("/{item_id}", response_model=Item)
def update_item(item_id: int, data: ItemUpdate, repos: Repositories = Depends(get_repos)):
    item = item_service.update_item(repos, item_id, data)
    if not item:
        raise HTTPException(404, "Item not found")
    return item


@router.post("/{item_id}/adjust", response_model=Item)
def adjust_stock(item_id: int, data: StockAdjust, repos: Repositories = Depends(get_repos)):
    try:
        item = item_service.adjust_stock(repos, item_id, data.quantity, data.notes)
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not item:
        raise HTTPException(404, "Item not found")
    return item


@router.delete("/{item_id}", status_code=204)
def delete_item(item_id: int, repos: Repositories = Depends(get_repos)):
    if not item_service.delete_item(repos, item_id):
        raise HTTPException(404, "Item not found")


@router.get("/{item_id}/history", response_model=list[StockHistoryEntry])
def item_history(item_id: int, repos: Repositories = Depends(get_repos)):
    return repos.stock_history.find_by_item_id(item_id)


@router.get("/{item_id}/cost-history", response_model=list[CostHistoryEntry])
def item_cost_history(item_id: int, repos: Repositories = Depends(get_repos)):
    return repos.cost_history.find_by_item_id(item_id)


@router.get("/{item_id}/cost-stats", response_model=CostStats)
def item_cost_stats(item_id: int, repos: Repositories = Depends(get_repos)):
    item = _get_or_404(repos, item_id)
    return cost_history_service.get_cost_stats(repos, item.id, item.unit_value)
