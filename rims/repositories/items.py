from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from rims.mapper import placeholders
from rims.repositories.base import BaseRepository, as_fields
from rims.schemas.item import Item
from rims.time_utils import utcnow_iso


class ItemRepository(BaseRepository[Item]):
    """Items table. ``value`` is always written as quantity * unit_value."""

    table_name = "items"
    model = Item

    def find_by_category(self, category: str) -> list[Item]:
        return self.query(f"SELECT * FROM {self.table_name} WHERE category = ?", [category])

    def find_by_barcode(self, barcode: str) -> Item | None:
        return self.query_one(f"SELECT * FROM {self.table_name} WHERE barcode = ?", [barcode])

    def update_category_bulk(self, ids: Sequence[int], category: str, updated_at: str | None = None) -> int:
        if not ids:
            return 0
        ids = list(ids)
        return self.db.execute(
            f"UPDATE {self.table_name} SET category = ?, updated_at = ? WHERE id IN ({placeholders(len(ids))})",
            [category, updated_at or utcnow_iso(), *ids],
        )

    def get_low_stock(self, threshold: int) -> list[Item]:
        return self.query(f"SELECT * FROM {self.table_name} WHERE quantity <= ?", [threshold])

    def get_items_needing_reorder(self) -> list[Item]:
        return self.query(f"SELECT * FROM {self.table_name} WHERE reorder_point > 0 AND quantity <= reorder_point")

    def get_total_quantity(self) -> int:
        return int(self.db.scalar(f"SELECT COALESCE(SUM(quantity), 0) AS total FROM {self.table_name}", default=0))

    def get_total_value(self) -> float:
        return float(self.db.scalar(f"SELECT COALESCE(SUM(value), 0) AS total FROM {self.table_name}", default=0))

    def create_with_value(self, data: Mapping[str, Any] | BaseModel) -> Item | None:
        fields = as_fields(data)
        fields.pop("value", None)
        now = utcnow_iso()
        fields.setdefault("createdAt", now)
        fields.setdefault("updatedAt", now)
        fields["value"] = (fields.get("quantity") or 0) * (fields.get("unitValue") or 0.0)
        return super().create(fields)

    def update_with_value(
        self, item_id: int, data: Mapping[str, Any] | BaseModel, updated_at: str | None = None
    ) -> Item | None:
        existing = self.get_by_id(item_id)
        if existing is None:
            return None
        fields = as_fields(data, exclude_unset=True)
        fields.pop("id", None)
        fields.pop("value", None)
        for operand in ("quantity", "unitValue"):
            if operand in fields and fields[operand] is None:
                del fields[operand]
        if not fields:
            return existing
        if "quantity" in fields or "unitValue" in fields:
            quantity = fields.get("quantity", existing.quantity)
            unit_value = fields.get("unitValue", existing.unit_value)
            fields["value"] = quantity * unit_value
        fields["updatedAt"] = updated_at or utcnow_iso()
        return super().update(item_id, fields)

    # Every write goes through the value-maintaining variants
    create = create_with_value
    update = update_with_value
