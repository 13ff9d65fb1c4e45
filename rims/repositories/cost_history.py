from rims.repositories.base import LedgerRepository
from rims.schemas.cost_history import CostHistoryEntry


class CostHistoryRepository(LedgerRepository[CostHistoryEntry]):
    table_name = "cost_history"
    model = CostHistoryEntry

    def get_all(self) -> list[CostHistoryEntry]:
        return self.query(f"SELECT * FROM {self.table_name} ORDER BY timestamp ASC, id ASC")

    def find_by_item_id(self, item_id: int) -> list[CostHistoryEntry]:
        return self.query(
            f"SELECT * FROM {self.table_name} WHERE item_id = ? ORDER BY timestamp ASC, id ASC", [item_id]
        )

    def delete_by_item_id(self, item_id: int) -> int:
        return self.db.execute(f"DELETE FROM {self.table_name} WHERE item_id = ?", [item_id])

    def get_latest_for_item(self, item_id: int) -> CostHistoryEntry | None:
        return self.query_one(
            f"SELECT * FROM {self.table_name} WHERE item_id = ? ORDER BY timestamp DESC, id DESC LIMIT 1",
            [item_id],
        )
