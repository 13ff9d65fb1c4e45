from datetime import timedelta
from typing import Any

from rims.database import Database
from rims.mapper import row_to_entity
from rims.schemas.vendor import VendorPriceResult
from rims.time_utils import to_iso, utcnow


def cache_key(vendor: str, part_number: str) -> str:
    return f"{vendor}-{part_number}".lower()


class VendorPriceCacheRepository:
    """Price lookups keyed by ``cache_key``; the surrogate id never leaves this class."""

    table_name = "vendor_price_cache"

    def __init__(self, db: Database):
        self.db = db

    @staticmethod
    def _to_result(row: dict[str, Any]) -> VendorPriceResult:
        entity = row_to_entity(row)
        entity.pop("id", None)
        entity.pop("cacheKey", None)
        return VendorPriceResult.model_validate(entity)

    def get_all(self) -> dict[str, VendorPriceResult]:
        rows = self.db.query(f"SELECT * FROM {self.table_name}")
        return {row["cache_key"]: self._to_result(row) for row in rows}

    def find_by_cache_key(self, key: str) -> VendorPriceResult | None:
        rows = self.db.query(f"SELECT * FROM {self.table_name} WHERE cache_key = ?", [key])
        return self._to_result(rows[0]) if rows else None

    def upsert(self, key: str, data: VendorPriceResult, persist: bool = True) -> None:
        values = [
            data.vendor,
            data.part_number,
            data.price,
            1 if data.in_stock else 0,
            data.stock_quantity,
            data.vendor_url,
            data.last_checked,
        ]
        if self.find_by_cache_key(key) is not None:
            self.db.execute(
                f"UPDATE {self.table_name} SET vendor = ?, part_number = ?, price = ?, in_stock = ?, "
                "stock_quantity = ?, vendor_url = ?, last_checked = ? WHERE cache_key = ?",
                [*values, key],
                persist=persist,
            )
            return
        entry_id = self.db.next_id(self.table_name)
        insert = (
            f"INSERT INTO {self.table_name} (id, cache_key, vendor, part_number, price, in_stock, "
            "stock_quantity, vendor_url, last_checked) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [entry_id, key, *values],
        )
        self.db.transaction([insert, self.db.id_watermark_statement(self.table_name, entry_id)], persist=persist)

    def delete_expired(self, max_age: timedelta) -> int:
        cutoff = to_iso(utcnow() - max_age)
        return self.db.execute(f"DELETE FROM {self.table_name} WHERE last_checked < ?", [cutoff])

    def clear_all(self) -> int:
        return self.db.execute(f"DELETE FROM {self.table_name}")

    def count(self) -> int:
        return int(self.db.scalar(f"SELECT COUNT(*) AS count FROM {self.table_name}", default=0))
