from typing import Literal

from rims.schemas.base import CamelModel

CostSource = Literal["manual", "vendor_lookup", "import"]


class CostHistoryEntry(CamelModel):
    id: int
    item_id: int
    old_value: float
    new_value: float
    source: str = "manual"
    timestamp: str


class CostStats(CamelModel):
    min: float
    max: float
    avg: float
    current: float
    change_count: int
    trend: Literal["up", "down", "stable"]
    first_recorded: str | None = None
    last_changed: str | None = None
