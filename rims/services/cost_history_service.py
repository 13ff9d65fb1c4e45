from rims.repositories.registry import Repositories
from rims.schemas.cost_history import CostHistoryEntry, CostSource, CostStats
from rims.time_utils import utcnow_iso


def record_cost_change(
    repos: Repositories, item_id: int, old_value: float, new_value: float, source: CostSource = "manual"
) -> CostHistoryEntry | None:
    # Unchanged cost is not a change
    if old_value == new_value:
        return None
    return repos.cost_history.create(
        {
            "itemId": item_id,
            "oldValue": old_value,
            "newValue": new_value,
            "source": source,
            "timestamp": utcnow_iso(),
        }
    )


def get_cost_stats(repos: Repositories, item_id: int, current_value: float) -> CostStats:
    history = repos.cost_history.find_by_item_id(item_id)
    if not history:
        return CostStats(
            min=current_value, max=current_value, avg=current_value, current=current_value,
            change_count=0, trend="stable",
        )

    values = [h.new_value for h in history] + [current_value]
    trend = "stable"
    if len(history) >= 2:
        recent = history[-3:]
        avg_change = sum(h.new_value - h.old_value for h in recent) / len(recent)
        if avg_change > 0.01:
            trend = "up"
        elif avg_change < -0.01:
            trend = "down"

    return CostStats(
        min=min(values),
        max=max(values),
        avg=round(sum(values) / len(values), 2),
        current=current_value,
        change_count=len(history),
        trend=trend,
        first_recorded=history[0].timestamp,
        last_changed=history[-1].timestamp,
    )
