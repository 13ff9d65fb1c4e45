from rims.repositories.base import BaseRepository
from rims.schemas.bom import BOM


class BOMRepository(BaseRepository[BOM]):
    table_name = "boms"
    model = BOM
    json_fields = ("items",)

    def find_containing_item(self, item_id: int) -> list[BOM]:
        # Lines live in a JSON column, so this filters in memory
        return [
            bom
            for bom in self.get_all()
            if isinstance(bom.items, list) and any(line.item_id == item_id for line in bom.items)
        ]

    def get_all_sorted(self) -> list[BOM]:
        return self.query(f"SELECT * FROM {self.table_name} ORDER BY name ASC")
