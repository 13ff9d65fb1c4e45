from typing import ClassVar

from pydantic import Field

from rims.schemas.base import CamelModel, PartialUpdate


class Item(CamelModel):
    id: int
    name: str
    description: str = ""
    product_model_number: str = ""
    vendor_part_number: str = ""
    vendor_name: str = ""
    quantity: int = 0
    unit_value: float = 0.0
    value: float = 0.0
    picture: str | None = None
    vendor_url: str = ""
    category: str = ""
    location: str = ""
    barcode: str = ""
    reorder_point: int = 0
    created_at: str
    updated_at: str


class ItemCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    product_model_number: str = ""
    vendor_part_number: str = ""
    vendor_name: str = ""
    quantity: int = Field(0, ge=0)
    unit_value: float = Field(0.0, ge=0)
    picture: str | None = None
    vendor_url: str = ""
    category: str = ""
    location: str = ""
    barcode: str = ""
    reorder_point: int = Field(0, ge=0)


class ItemUpdate(PartialUpdate):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"picture"})

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    product_model_number: str | None = None
    vendor_part_number: str | None = None
    vendor_name: str | None = None
    quantity: int | None = Field(None, ge=0)
    unit_value: float | None = Field(None, ge=0)
    picture: str | None = None
    vendor_url: str | None = None
    category: str | None = None
    location: str | None = None
    barcode: str | None = None
    reorder_point: int | None = Field(None, ge=0)


class StockAdjust(CamelModel):
    quantity: int  # positive to add, negative to remove
    notes: str = ""


class BulkIds(CamelModel):
    ids: list[int]


class BulkCategory(CamelModel):
    ids: list[int]
    category: str
