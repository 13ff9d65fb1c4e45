from typing import Any

from pydantic import Field

from rims.schemas.base import CamelModel, PartialUpdate


class ItemTemplate(CamelModel):
    id: int
    name: str
    category: str
    # Partial item attributes (camelCase keys); raw string if unparseable
    default_fields: dict[str, Any] | str = {}
    created_at: str
    updated_at: str


class ItemTemplateCreate(CamelModel):
    name: str = Field(min_length=1)
    category: str
    default_fields: dict[str, Any] = {}


class ItemTemplateUpdate(PartialUpdate):
    name: str | None = Field(None, min_length=1)
    category: str | None = None
    default_fields: dict[str, Any] | None = None


class ItemTemplateFromItem(CamelModel):
    item_id: int
    name: str = Field(min_length=1)
