import math

from rims.repositories.registry import Repositories
from rims.schemas.bom import BOM, BOMAvailability, BOMCostBreakdown, BOMCreate, BOMLineCost, BOMUpdate
from rims.time_utils import utcnow_iso


def list_boms(repos: Repositories) -> list[BOM]:
    return repos.boms.get_all_sorted()


def get_bom(repos: Repositories, bom_id: int) -> BOM | None:
    return repos.boms.get_by_id(bom_id)


def create_bom(repos: Repositories, data: BOMCreate) -> BOM | None:
    now = utcnow_iso()
    fields = data.model_dump(by_alias=True)
    fields["createdAt"] = now
    fields["updatedAt"] = now
    return repos.boms.create(fields)


def update_bom(repos: Repositories, bom_id: int, data: BOMUpdate) -> BOM | None:
    if not repos.boms.get_by_id(bom_id):
        return None
    fields = data.model_dump(by_alias=True, exclude_unset=True)
    fields["updatedAt"] = utcnow_iso()
    return repos.boms.update(bom_id, fields)


def delete_bom(repos: Repositories, bom_id: int) -> bool:
    return repos.boms.delete(bom_id)


def duplicate_bom(repos: Repositories, bom_id: int, new_name: str) -> BOM | None:
    bom = repos.boms.get_by_id(bom_id)
    if not bom:
        return None
    lines = bom.items if isinstance(bom.items, list) else []
    return create_bom(
        repos,
        BOMCreate(name=new_name, description=bom.description, items=[line.model_dump() for line in lines]),
    )


def calculate_bom_cost(repos: Repositories, bom_id: int) -> BOMCostBreakdown | None:
    """Cost and buildable count; lines pointing at deleted items are ignored."""
    bom = repos.boms.get_by_id(bom_id)
    if not bom:
        return None

    item_costs: list[BOMLineCost] = []
    total_cost = 0.0
    min_can_build = math.inf
    for line in bom.items if isinstance(bom.items, list) else []:
        item = repos.items.get_by_id(line.item_id)
        if not item or line.quantity <= 0:
            continue
        line_cost = item.unit_value * line.quantity
        item_costs.append(
            BOMLineCost(
                item_id=item.id,
                item_name=item.name,
                unit_cost=item.unit_value,
                quantity=line.quantity,
                line_cost=line_cost,
                available=item.quantity,
                can_build=item.quantity >= line.quantity,
            )
        )
        total_cost += line_cost
        min_can_build = min(min_can_build, item.quantity // line.quantity)

    return BOMCostBreakdown(
        bom_id=bom_id,
        total_cost=round(total_cost, 2),
        item_costs=item_costs,
        can_build_quantity=0 if min_can_build == math.inf else int(min_can_build),
    )


def check_availability(repos: Repositories, bom_id: int) -> BOMAvailability | None:
    breakdown = calculate_bom_cost(repos, bom_id)
    if not breakdown:
        return None
    missing = [
        f"{line.item_name} (need {line.quantity}, have {line.available})"
        for line in breakdown.item_costs
        if not line.can_build
    ]
    return BOMAvailability(can_build=not missing, missing_items=missing)


def get_boms_containing_item(repos: Repositories, item_id: int) -> list[BOM]:
    return repos.boms.find_containing_item(item_id)
