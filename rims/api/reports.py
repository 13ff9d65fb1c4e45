from datetime import date

from fastapi import APIRouter, Depends, Query

from rims.repositories.registry import Repositories, get_repos
from rims.schemas.stock_history import StockChangeType, StockHistoryEntry, StockHistoryFilter, StockHistoryStats
from rims.services import report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


def _history_filter(
    item_id: int | None = Query(None, alias="itemId"),
    change_type: StockChangeType | None = Query(None, alias="changeType"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    user_id: int | None = Query(None, alias="userId"),
) -> StockHistoryFilter:
    return StockHistoryFilter(
        item_id=item_id, change_type=change_type, start_date=start_date, end_date=end_date, user_id=user_id
    )


@router.get("/inventory")
def inventory_report(threshold: int | None = None, repos: Repositories = Depends(get_repos)):
    return report_service.inventory_summary(repos, threshold)


@router.get("/history", response_model=list[StockHistoryEntry])
def history_report(
    limit: int | None = None,
    history_filter: StockHistoryFilter = Depends(_history_filter),
    repos: Repositories = Depends(get_repos),
):
    entries = repos.stock_history.find_filtered(history_filter)
    return entries[:limit] if limit else entries


@router.get("/history/stats", response_model=StockHistoryStats)
def history_stats(
    history_filter: StockHistoryFilter = Depends(_history_filter),
    repos: Repositories = Depends(get_repos),
):
    return report_service.history_stats(repos, history_filter)
