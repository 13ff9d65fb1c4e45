from datetime import date, datetime
from typing import Literal

from rims.schemas.base import CamelModel

StockChangeType = Literal["created", "updated", "deleted", "adjusted", "category_changed"]


class StockHistoryEntry(CamelModel):
    id: int
    item_id: int
    item_name: str
    change_type: str
    previous_quantity: int | None = None
    new_quantity: int | None = None
    previous_value: float | None = None
    new_value: float | None = None
    previous_category: str | None = None
    new_category: str | None = None
    notes: str = ""
    user_id: int | None = None
    user_email: str | None = None
    timestamp: str


class StockHistoryFilter(CamelModel):
    item_id: int | None = None
    change_type: StockChangeType | None = None
    start_date: date | datetime | str | None = None
    # Whole day is included: the bound is pushed to 23:59:59.999
    end_date: date | datetime | str | None = None
    user_id: int | None = None


class StockHistoryStats(CamelModel):
    total_changes: int = 0
    created: int = 0
    updated: int = 0
    deleted: int = 0
    adjusted: int = 0
    category_changed: int = 0
    net_quantity_change: int = 0
