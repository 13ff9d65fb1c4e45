from rims.repositories.base import BaseRepository
from rims.schemas.item_template import ItemTemplate


class ItemTemplateRepository(BaseRepository[ItemTemplate]):
    table_name = "item_templates"
    model = ItemTemplate
    json_fields = ("defaultFields",)

    def find_by_category(self, category: str) -> list[ItemTemplate]:
        return self.query(f"SELECT * FROM {self.table_name} WHERE category = ?", [category])

    def get_all_sorted(self) -> list[ItemTemplate]:
        return self.query(f"SELECT * FROM {self.table_name} ORDER BY name ASC")
