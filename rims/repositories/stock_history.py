from rims.repositories.base import LedgerRepository
from rims.schemas.stock_history import StockHistoryEntry, StockHistoryFilter, StockHistoryStats
from rims.time_utils import end_of_day_iso, start_of_day_iso


class StockHistoryRepository(LedgerRepository[StockHistoryEntry]):
    table_name = "stock_history"
    model = StockHistoryEntry

    def get_all(self) -> list[StockHistoryEntry]:
        return self.query(f"SELECT * FROM {self.table_name} ORDER BY timestamp DESC, id DESC")

    def find_by_item_id(self, item_id: int) -> list[StockHistoryEntry]:
        return self.query(
            f"SELECT * FROM {self.table_name} WHERE item_id = ? ORDER BY timestamp DESC, id DESC", [item_id]
        )

    def find_filtered(self, history_filter: StockHistoryFilter | None = None) -> list[StockHistoryEntry]:
        history_filter = history_filter or StockHistoryFilter()
        conditions: list[str] = []
        params: list = []

        if history_filter.item_id is not None:
            conditions.append("item_id = ?")
            params.append(history_filter.item_id)
        if history_filter.change_type:
            conditions.append("change_type = ?")
            params.append(history_filter.change_type)
        if history_filter.start_date:
            conditions.append("timestamp >= ?")
            params.append(start_of_day_iso(history_filter.start_date))
        if history_filter.end_date:
            conditions.append("timestamp <= ?")
            params.append(end_of_day_iso(history_filter.end_date))
        if history_filter.user_id is not None:
            conditions.append("user_id = ?")
            params.append(history_filter.user_id)

        sql = f"SELECT * FROM {self.table_name}"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY timestamp DESC, id DESC"
        return self.query(sql, params)

    def find_recent(self, limit: int = 10) -> list[StockHistoryEntry]:
        return self.query(f"SELECT * FROM {self.table_name} ORDER BY timestamp DESC, id DESC LIMIT ?", [limit])

    def clear_all(self) -> int:
        return self.db.execute(f"DELETE FROM {self.table_name}")

    def get_stats(self, history_filter: StockHistoryFilter | None = None) -> StockHistoryStats:
        stats = StockHistoryStats()
        for entry in self.find_filtered(history_filter):
            stats.total_changes += 1
            previous = entry.previous_quantity or 0
            new = entry.new_quantity or 0
            if entry.change_type == "created":
                stats.created += 1
                stats.net_quantity_change += new
            elif entry.change_type == "deleted":
                stats.deleted += 1
                stats.net_quantity_change -= previous
            elif entry.change_type == "updated":
                stats.updated += 1
                stats.net_quantity_change += new - previous
            elif entry.change_type == "adjusted":
                stats.adjusted += 1
                stats.net_quantity_change += new - previous
            elif entry.change_type == "category_changed":
                stats.category_changed += 1
        return stats
