from pydantic import Field

from rims.schemas.base import CamelModel, PartialUpdate


class BOMItem(CamelModel):
    item_id: int
    quantity: int = 1
    notes: str = ""


class BOM(CamelModel):
    id: int
    name: str
    description: str = ""
    # Raw string when the stored JSON could not be parsed
    items: list[BOMItem] | str = []
    created_at: str
    updated_at: str


class BOMLineIn(CamelModel):
    item_id: int
    quantity: int = Field(1, ge=1)
    notes: str = ""


class BOMCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    items: list[BOMLineIn] = []


class BOMUpdate(PartialUpdate):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    items: list[BOMLineIn] | None = None


class BOMDuplicate(CamelModel):
    name: str = Field(min_length=1)


class BOMLineCost(CamelModel):
    item_id: int
    item_name: str
    unit_cost: float
    quantity: int
    line_cost: float
    available: int
    can_build: bool


class BOMCostBreakdown(CamelModel):
    bom_id: int
    total_cost: float
    item_costs: list[BOMLineCost]
    can_build_quantity: int


class BOMAvailability(CamelModel):
    can_build: bool
    missing_items: list[str]
