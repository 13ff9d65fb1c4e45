from rims.repositories.registry import Repositories
from rims.schemas.item import Item
from rims.schemas.item_template import ItemTemplate, ItemTemplateCreate, ItemTemplateUpdate
from rims.time_utils import utcnow_iso

# Item attributes a template captures when built from an existing item
TEMPLATE_ITEM_FIELDS = ("vendorName", "vendorUrl", "location", "reorderPoint", "description")


def list_templates(repos: Repositories) -> list[ItemTemplate]:
    return repos.item_templates.get_all_sorted()


def get_template(repos: Repositories, template_id: int) -> ItemTemplate | None:
    return repos.item_templates.get_by_id(template_id)


def get_templates_for_category(repos: Repositories, category: str) -> list[ItemTemplate]:
    return repos.item_templates.find_by_category(category)


def create_template(repos: Repositories, data: ItemTemplateCreate) -> ItemTemplate | None:
    now = utcnow_iso()
    fields = data.model_dump(by_alias=True)
    fields["createdAt"] = now
    fields["updatedAt"] = now
    return repos.item_templates.create(fields)


def update_template(repos: Repositories, template_id: int, data: ItemTemplateUpdate) -> ItemTemplate | None:
    if not repos.item_templates.get_by_id(template_id):
        return None
    fields = data.model_dump(by_alias=True, exclude_unset=True)
    fields["updatedAt"] = utcnow_iso()
    return repos.item_templates.update(template_id, fields)


def delete_template(repos: Repositories, template_id: int) -> bool:
    return repos.item_templates.delete(template_id)


def create_template_from_item(repos: Repositories, name: str, item: Item) -> ItemTemplate | None:
    """Template in the item's category, pre-filled with its vendor, location and reorder settings."""
    attributes = item.model_dump(by_alias=True)
    return create_template(
        repos,
        ItemTemplateCreate(
            name=name,
            category=item.category,
            default_fields={field: attributes[field] for field in TEMPLATE_ITEM_FIELDS},
        ),
    )
